import textwrap

from appwrap.config import PackageSpec


def render_apprun(spec: PackageSpec) -> str:
    """Shell entry point that execs the packaged binary next to itself.

    ``readlink -f`` dereferences symlinks, so the script works when called
    through a link in another directory or from any working directory.
    """

    return textwrap.dedent(
        """\
        #!/bin/sh
        HERE="$(dirname "$(readlink -f "$0")")"
        exec "$HERE/usr/bin/{app_name}" "$@"
        """
    ).format(app_name=spec.app_name)
