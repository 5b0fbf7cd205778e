import stat
from pathlib import Path


# Stands in for the prebuilt application: echoes its arguments one per line
# and exits with $FAKE_EXIT.
FAKE_APP = """\
#!/bin/sh
for arg in "$@"; do
    printf '%s\\n' "$arg"
done
exit "${FAKE_EXIT:-0}"
"""


def write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def read_tool_log(work_dir: Path) -> list[str]:
    """Arguments and environment recorded by the fake appimagetool."""
    return (work_dir / "tool.log").read_text().splitlines()
