from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, Iterable

import pytest

from appwrap.config import BuildConfig, PackageSpec
from appwrap.context import BuildContext

from helpers import FAKE_APP, write_script


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    write_script(root / "target" / "release" / "editor", FAKE_APP)
    return root


@pytest.fixture
def fake_strip(tmp_path: Path) -> Path:
    return write_script(
        tmp_path / "bin" / "strip",
        textwrap.dedent(
            """\
            #!/bin/sh
            [ "$1" = "--strip-all" ] || exit 2
            printf '# stripped\\n' >> "$2"
            """
        ),
    )


@pytest.fixture
def make_upx(tmp_path: Path) -> Callable[..., Path]:
    def factory(fail: Iterable[str] = ()) -> Path:
        failing = " ".join(fail)
        return write_script(
            tmp_path / "bin" / "upx",
            textwrap.dedent(
                f"""\
                #!/bin/sh
                case " {failing} " in
                    *" $1 "*) echo "upx: CantPackException: $1" >&2; exit 1 ;;
                esac
                printf '# packed %s\\n' "$1" >> "$2"
                """
            ),
        )

    return factory


@pytest.fixture
def fake_appimagetool(work_dir: Path) -> Path:
    # Records its arguments and environment, checks the AppDir, writes the image.
    return write_script(
        work_dir / "appimagetool-x86_64.AppImage",
        textwrap.dedent(
            """\
            #!/bin/sh
            log="$(dirname "$0")/tool.log"
            printf '%s\\n' "$@" > "$log"
            printf 'APPIMAGE_EXTRACT_AND_RUN=%s\\n' "$APPIMAGE_EXTRACT_AND_RUN" >> "$log"
            printf 'ARCH=%s\\n' "$ARCH" >> "$log"
            appdir=""
            out=""
            for arg in "$@"; do
                appdir="$out"
                out="$arg"
            done
            [ -x "$appdir/AppRun" ] || { echo "no AppRun in $appdir" >&2; exit 3; }
            printf 'fake appimage\\n' > "$out"
            """
        ),
    )


@pytest.fixture
def failing_appimagetool(work_dir: Path) -> Path:
    return write_script(
        work_dir / "appimagetool-x86_64.AppImage",
        "#!/bin/sh\necho 'mksquashfs: compression failed' >&2\nexit 1\n",
    )


@pytest.fixture
def make_context(
    work_dir: Path,
    fake_strip: Path,
    make_upx: Callable[..., Path],
) -> Callable[..., BuildContext]:
    def factory(
        *,
        upx_fail: Iterable[str] = (),
        spec: PackageSpec | None = None,
        **config: object,
    ) -> BuildContext:
        upx = make_upx(fail=upx_fail)
        return BuildContext.create(
            spec or PackageSpec(app_name="editor"),
            config=BuildConfig(
                strip_executable=str(fake_strip),
                upx_executable=str(upx),
                **config,
            ),
            work_dir=work_dir,
        )

    return factory
