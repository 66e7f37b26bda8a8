import stat
import tempfile
from pathlib import Path

STUB_TEMPLATE = '''#!/bin/sh
for arg in "$@"; do printf '%s\\t' "$arg"; done >> {calls}
echo >> {calls}
case "$7" in
  ps) cat {ps_output} ;;
  {hang_on}) exec sleep 30 ;;
esac
'''


class ComposeStub:
    """
    Executable standing in for `docker compose`: records every argv and answers `ps` with prepared output.
    """

    def __init__(self, ps_output: str = '', hang_on: str = 'never'):
        self.directory = Path(tempfile.mkdtemp())
        self.calls_path = self.directory / 'calls'
        self.calls_path.touch()
        ps_output_path = self.directory / 'ps_output'
        ps_output_path.write_text(ps_output)

        self.bin = self.directory / 'docker-compose'
        self.bin.write_text(STUB_TEMPLATE.format(calls=self.calls_path, ps_output=ps_output_path, hang_on=hang_on))
        self.bin.chmod(self.bin.stat().st_mode | stat.S_IEXEC)

    def calls(self) -> list[list[str]]:
        return [line.rstrip('\t').split('\t') for line in self.calls_path.read_text().splitlines()]

    def subcommands(self) -> list[list[str]]:
        # drops --project-name, --project-directory and --file with their values
        return [call[6:] for call in self.calls()]
