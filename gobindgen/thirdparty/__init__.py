from .gofmt import GoFmt
from .thirdparty import ThirdParty


def check_all_requirements() -> list[str]:
    result = []
    result.extend(GoFmt.check_requirements())
    return result


__all__ = [
    'GoFmt',
    'ThirdParty',
    'check_all_requirements',
]
