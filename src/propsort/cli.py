from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence
import json

import typer

from propsort.config import merge_payload, sort_props_defaults
from propsort.exceptions import ConfigError, IngestError
from propsort.ingest import SourceText, load_tree
from propsort.model import Finding, OrderOptions, TextEdit
from propsort.rule import RULE_META, SortPropsRule
from propsort.schema import options_from_payload, options_json_schema, report_dto

app = typer.Typer(add_completion=False, help=RULE_META.description)

_EXIT_OK = 0
_EXIT_VIOLATIONS = 1
_EXIT_USAGE = 2


def resolve_options(
    *,
    root: Path,
    config: Path | None,
    react_props_first: bool | None,
    react_props: Sequence[str] | None,
) -> OrderOptions:
    defaults = sort_props_defaults(root=root, config_path=config)
    payload = {
        "react_props_first": react_props_first,
        "react_props_list": list(react_props) if react_props else None,
    }
    return options_from_payload(merge_payload(payload, defaults))


def apply_edits(content: str, edits: Sequence[TextEdit]) -> tuple[str, list[TextEdit], list[TextEdit]]:
    """Apply non-overlapping edits; returns (text, applied, skipped).

    Edits are taken outermost-first by start offset; any edit overlapping one
    already taken is skipped.
    """
    ordered = sorted(edits, key=lambda edit: (edit.span[0], -edit.span[1]))
    applied: list[TextEdit] = []
    skipped: list[TextEdit] = []
    last_end = -1
    for edit in ordered:
        if edit.span[0] < last_end:
            skipped.append(edit)
            continue
        applied.append(edit)
        last_end = edit.span[1]
    out = content
    for edit in reversed(applied):
        start, end = edit.span
        out = out[:start] + edit.replacement + out[end:]
    return out, applied, skipped


def _lint_line(path: Path, finding: Finding) -> str:
    line = f"{path}:{finding.line}:{finding.column}: {finding.message}"
    if finding.detail:
        line += f" ({finding.detail})"
    return line


@app.command()
def check(
    source: Path = typer.Argument(..., help="JSX/TSX source file."),
    ast: Path = typer.Option(..., "--ast", help="ESTree/Babel JSON syntax tree of SOURCE."),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    react_props_first: Optional[bool] = typer.Option(
        None,
        "--react-props-first/--no-react-props-first",
        help="Place configured React props before every other category.",
    ),
    react_prop: Optional[List[str]] = typer.Option(
        None,
        "--react-prop",
        help="Priority prop name; repeat to build the ordered list.",
    ),
    fix: bool = typer.Option(False, "--fix", help="Rewrite SOURCE in place."),
    output_json: bool = typer.Option(False, "--json", help="Emit a JSON report."),
    fail_on_violations: bool = typer.Option(
        True, "--fail-on-violations/--no-fail-on-violations"
    ),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Report (and optionally fix) JSX opening tags whose props are out of order."""
    try:
        options = resolve_options(
            root=root,
            config=config,
            react_props_first=react_props_first,
            react_props=react_prop,
        )
    except ConfigError as exc:
        typer.echo(f"Invalid sort_props options: {exc}", err=True)
        raise typer.Exit(code=_EXIT_USAGE)
    try:
        source_text = SourceText.read(source)
        tree = load_tree(ast)
    except IngestError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=_EXIT_USAGE)

    report = SortPropsRule(options).check_tree(tree, source_text)
    remaining = list(report.findings)
    if fix:
        edits = [finding.fix for finding in report.findings if finding.fix is not None]
        new_content, applied, skipped = apply_edits(source_text.content, edits)
        for edit in skipped:
            line, column = source_text.position(edit.span[0])
            report.warnings.append(
                f"{line}:{column}: fix overlaps another fix; run again to apply it"
            )
        if applied:
            source.write_text(new_content, encoding="utf-8")
        applied_spans = {edit.span for edit in applied}
        remaining = [
            finding
            for finding in report.findings
            if finding.fix is None or finding.fix.span not in applied_spans
        ]
        if not output_json:
            typer.echo(f"Fixed {len(applied)} element(s) in {source}", err=True)

    if output_json:
        response = report_dto(report, path=str(source))
        response.findings = [
            item
            for item, finding in zip(response.findings, report.findings)
            if finding in remaining
        ]
        typer.echo(json.dumps(response.model_dump(), indent=2, sort_keys=True))
    else:
        for finding in remaining:
            typer.echo(_lint_line(source, finding))
        for warning in report.warnings:
            typer.echo(f"warning: {warning}", err=True)
        if verbose:
            for skipped_entry in report.skipped:
                typer.echo(f"skipped: {skipped_entry}", err=True)

    if remaining and fail_on_violations:
        raise typer.Exit(code=_EXIT_VIOLATIONS)
    raise typer.Exit(code=_EXIT_OK)


@app.command("schema")
def schema() -> None:
    """Print the JSON schema of the rule options."""
    typer.echo(json.dumps(options_json_schema(), indent=2, sort_keys=True))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
