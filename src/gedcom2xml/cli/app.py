
from __future__ import annotations

import typer

from gedcom2xml.cli.commands.convert import convert_command
from gedcom2xml.cli.commands.stats import stats_command

app = typer.Typer(
    name="gedcom2xml",
    help="GEDCOM to XML converter and inspector",
    add_completion=False,
)

app.command("convert")(convert_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
