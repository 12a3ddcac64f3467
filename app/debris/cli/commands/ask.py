"""Ask command implementation.

Answers a question about the patterns of the stored snapshot.
"""

from typing import Annotated

import typer

from debris.cli.types import get_app_context
from debris.utils.formatting import console


def ask(
    ctx: typer.Context,
    question: Annotated[
        str,
        typer.Argument(help="Question about the detected patterns."),
    ],
) -> None:
    """Ask which files are safe to delete or what takes the most space.

    Examples:
        debris ask "What's safe to delete?"
        debris ask "Show me the largest files"
    """
    app_ctx = get_app_context(ctx)
    snapshot = app_ctx.store.load()
    patterns = list(snapshot.patterns) if snapshot is not None else []

    answer = app_ctx.responder().answer(question, patterns)
    console.print(answer, markup=False)
