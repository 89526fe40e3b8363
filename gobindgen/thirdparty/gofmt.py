import shutil
from typing_extensions import override

from gobindgen import utils

from .thirdparty import ThirdParty


class GoFmt(ThirdParty):
    def __init__(self, file_path):
        self.file_path = file_path

    @staticmethod
    @override
    def check_requirements() -> list[str]:
        if not shutil.which("gofmt"):
            return ["gofmt"]
        return []

    def format(self):
        cmd = ["gofmt", "-w", self.file_path]
        result = utils.run_command(cmd, capture_output=False)
        if result.returncode != 0:
            raise OSError(f"Failed to format the file: {self.file_path}")
