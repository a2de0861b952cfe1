from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.code == 0


def run(cmd: list[str], cwd: str | None = None) -> CmdResult:
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            text=True,
            capture_output=True,
            check=False,
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        return CmdResult(127, "", str(exc))
    return CmdResult(proc.returncode, proc.stdout.strip(), proc.stderr.strip())


def from_epoch(raw: str) -> datetime | None:
    try:
        seconds = int(raw.strip())
    except ValueError:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone()


def format_stamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S %z")


def first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""
