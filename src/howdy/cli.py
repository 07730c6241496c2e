"""Howdy CLI - personal mood journal."""

import json
import logging
import sys

import click

from .config import load_config
from .errors import CorruptJournalError, InvalidReportType, ValidationError
from .workflows import add_entry, build_report, get_journal, split_mood_args

EXIT_VALIDATION = 2
EXIT_UNREADABLE = 3
EXIT_CORRUPT = 4
EXIT_REPORT_TYPE = 5


@click.group()
@click.version_option()
@click.option("--file", "-f", "file_path", default=None, type=click.Path(dir_okay=False),
              help="Journal file (default: ./howdy.journal)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, file_path: str | None, debug: bool):
    """Howdy - personal mood journal."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config()
    ctx.obj["file_path"] = file_path


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("score", type=int)
@click.option("--tag", "-t", "tags", multiple=True, help="Tag for this entry (repeatable)")
@click.argument("comment", nargs=-1)
@click.pass_context
def add(ctx, score: int, tags: tuple[str, ...], comment: tuple[str, ...]):
    """Record today's SCORE with an optional comment.

    Put the comment after -- when it starts with a dash, otherwise a word
    like -tired is read as the tag "ired":

    \b
      howdy add -1 -t work -- -tired again
    """
    config = ctx.obj["config"]
    try:
        record = add_entry(config, score, tags, " ".join(comment), file_path=ctx.obj["file_path"])
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_VALIDATION)
    except OSError as e:
        click.echo(f"Error: cannot write journal: {e}", err=True)
        sys.exit(EXIT_UNREADABLE)

    tags_text = f" [{', '.join(sorted(record.tags))}]" if record.tags else ""
    comment_text = f' "{record.comment}"' if record.comment else ""
    click.echo(f"✓ {record.date.isoformat()}: {record.score:+d}{tags_text}{comment_text}")


@main.command()
@click.argument("args", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def mood(ctx, args: tuple[str, ...], as_json: bool):
    """Show mood report: mood [TAG...] [REPORT_TYPE]

    \b
    Report types:
      w,  weekly       Monday-Sunday weeks
      7d, 7-day        7-day windows ending today
      m,  monthly      calendar months (default)
      30d, 30-day      30-day windows ending today
      lm, last-month   the last 30 days
      y,  yearly       the last 365 days
      mm, moving       30-day moving sum over the last 30 days
    """
    config = ctx.obj["config"]
    tags, token = split_mood_args(args, config.default_report)

    try:
        report_type, buckets = build_report(config, token, tags, file_path=ctx.obj["file_path"])
    except InvalidReportType as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_REPORT_TYPE)
    except CorruptJournalError as e:
        click.echo(f"Error: journal is corrupt at line {e.line_number}: {e.reason}", err=True)
        click.echo(f"  {e.line}", err=True)
        sys.exit(EXIT_CORRUPT)
    except FileNotFoundError:
        path = get_journal(config, ctx.obj["file_path"]).path
        click.echo(f"Error: journal file not found: {path}", err=True)
        click.echo("Record a score first with 'howdy add SCORE'.", err=True)
        sys.exit(EXIT_UNREADABLE)
    except OSError as e:
        click.echo(f"Error: cannot read journal: {e}", err=True)
        sys.exit(EXIT_UNREADABLE)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "report": report_type.value,
                    "tags": sorted(tags),
                    "buckets": [
                        {
                            "label": b.label,
                            "start": b.start.isoformat(),
                            "end": b.end.isoformat(),
                            "score": b.score,
                        }
                        for b in buckets
                    ],
                },
                indent=2,
            )
        )
        return

    if not buckets:
        click.echo("No entries yet.")
        return

    click.echo(report_type.caption)
    width = max(len(b.label) for b in buckets)
    for bucket in buckets:
        click.echo(f"  {bucket.label:{width}}  {bucket.score:+d}")


if __name__ == "__main__":
    main()
