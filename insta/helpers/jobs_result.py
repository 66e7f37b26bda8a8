from enum import Enum
from enum import auto


class JobResult(Enum):
    GOOD = auto()
    BAD = auto()


class OperationError:
    def __init__(self, cmd: str, returncode: int | None, stdout: bytes, stderr: bytes):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    @property
    def log(self) -> str:
        return (f'Stdout:\n{self.stdout.decode("utf-8", errors="replace")}\n\n'
                f'Stderr:\n{self.stderr.decode("utf-8", errors="replace")}')

    def __eq__(self, other):
        return other == JobResult.BAD

    def __repr__(self):
        return f'Operation `{self.cmd}` finished unsuccessful ({self.returncode}):\n{self.log}'
