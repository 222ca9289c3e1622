"""CLI entrypoint: Typer app definition and command registration"""

import typer

from rstpub.cli.commands import build_cmd, parse_cmd, search_cmd


app = typer.Typer(name="rstpub", no_args_is_help=True, help="Compile an RST content tree into JSON indices")

app.command(name="build")(build_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="search")(search_cmd)
