import argparse
import os
import sys

from gobindgen import logging as gobindgen_logging, utils
from gobindgen.generator import generate_header, render_report


def parse_generate(parser):
    parser.add_argument(
        'header',
        type=str,
        help='The C header whose declarations are turned into Go bindings'
    )

    parser.add_argument(
        '--output',
        '-o',
        type=str,
        help='The Go file to write, default to stdout'
    )

    parser.add_argument(
        '--config',
        '-c',
        type=str,
        dest='config_file',
        help='The configuration file to use'
    )

    parser.add_argument(
        '--package',
        type=str,
        help='The Go package name, overrides generate.package from the configuration'
    )

    parser.add_argument(
        '--include',
        '-I',
        action='append',
        default=[],
        dest='include_paths',
        help='An extra include directory for libclang, can be repeated'
    )

    parser.add_argument(
        '--fail-fast',
        action='store_true',
        default=None,
        help='Stop at the first declaration that cannot be generated'
    )

    parser.add_argument(
        '--no-format',
        action='store_true',
        help='Do not run gofmt on the written file'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        help='Console log level, overrides logging.console_level'
    )


def generate(parser, args):
    if not os.path.isfile(args.header):
        parser.error(f'Header {args.header} does not exist')

    config = utils.try_load_config(args.config_file)
    console_level = args.log_level
    if console_level is None and not args.output:
        # keep stdout for the generated code
        console_level = 'ERROR'
    gobindgen_logging.configure_logging(config, console_level_override=console_level)

    report = generate_header(
        args.header,
        config,
        include_paths=args.include_paths,
        fail_fast=args.fail_fast,
    )
    code = render_report(report, config, args.header, package=args.package)

    if args.output:
        utils.save_code(args.output, code, format_code=not args.no_format)
    else:
        sys.stdout.write(code)

    print(report.summary(), file=sys.stderr)
    if report.any_failed:
        print('❌ Some declarations could not be generated', file=sys.stderr)
        sys.exit(1)
    print('✅ Bindings generated successfully!', file=sys.stderr)


def main():
    parser = argparse.ArgumentParser(
        description='gobindgen: Go (cgo) bindings from C headers through libclang'
    )

    subparsers = parser.add_subparsers(
        dest='subcommand',
        description='valid subcommands for gobindgen',
        help='Use one of these subcommands followed by -h for additional help',
        required=True
    )

    generate_parser = subparsers.add_parser(
        'generate',
        help='Generate Go bindings for a C header'
    )

    parse_generate(generate_parser)

    args = parser.parse_args()

    match args.subcommand:
        case 'generate':
            generate(parser, args)
        case _:
            parser.print_help()


if __name__ == '__main__':
    main()
