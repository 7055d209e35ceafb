from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from propsort.exceptions import IngestError
from propsort.ingest.estree import ingest_opening_element, iter_opening_elements
from propsort.ingest.source_text import SourceText
from propsort.model import (
    CheckReport,
    Element,
    Finding,
    FixOutcome,
    NoChange,
    OrderOptions,
    Replacement,
    TextEdit,
    TextFn,
    Unsafe,
)
from propsort.rewrite import REPORT_MESSAGE, build_fix


@dataclass(frozen=True)
class RuleMeta:
    name: str
    type: str
    description: str
    fixable: str


RULE_META = RuleMeta(
    name="sort-props",
    type="suggestion",
    description="Sort JSX props by type and length, with React reserved words at the top",
    fixable="code",
)


class SortPropsRule:
    def __init__(self, options: OrderOptions | None = None) -> None:
        self.options = options if options is not None else OrderOptions()

    def evaluate(self, element: Element, text: TextFn) -> FixOutcome:
        return build_fix(element, options=self.options, text=text)

    def check_element(
        self,
        element: Element,
        source: SourceText,
        *,
        skipped: list[str] | None = None,
    ) -> Finding | None:
        """Return a finding for ``element`` or ``None`` when nothing is reported.

        Failures inside the pipeline skip the element; they never escape.
        """
        try:
            outcome = self.evaluate(element, source.text)
        except Exception as exc:
            if skipped is not None:
                line, column = source.position(element.span[0])
                skipped.append(f"{line}:{column}: skipped element: {exc}")
            return None
        if isinstance(outcome, NoChange):
            return None
        line, column = source.position(element.span[0])
        if isinstance(outcome, Unsafe):
            return Finding(
                message=REPORT_MESSAGE,
                span=element.span,
                line=line,
                column=column,
                detail=outcome.message,
            )
        if isinstance(outcome, Replacement):
            if outcome.placeholders:
                # A placeholder stands in for lost attribute text; report only.
                return Finding(
                    message=outcome.message,
                    span=element.span,
                    line=line,
                    column=column,
                    detail=(
                        f"needs manual reorder: {outcome.placeholders} attribute(s) "
                        "could not be read"
                    ),
                )
            return Finding(
                message=outcome.message,
                span=element.span,
                line=line,
                column=column,
                fix=TextEdit(span=element.span, replacement=outcome.text),
            )
        return None

    def check_elements(self, elements: Iterable[Element], source: SourceText) -> CheckReport:
        report = CheckReport()
        for element in elements:
            finding = self.check_element(element, source, skipped=report.skipped)
            if finding is not None:
                report.findings.append(finding)
        return report

    def check_tree(self, tree: Mapping[str, object], source: SourceText) -> CheckReport:
        elements: list[Element] = []
        malformed: list[str] = []
        for node in iter_opening_elements(tree):
            try:
                elements.append(ingest_opening_element(node, source))
            except IngestError as exc:
                malformed.append(f"skipped malformed opening element: {exc}")
        report = self.check_elements(elements, source)
        report.skipped[:0] = malformed
        return report

