from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from propsort.exceptions import ConfigError
from propsort.model import DEFAULT_REACT_PROPS, CheckReport, Finding, OrderOptions


class SortPropsOptionsDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, strict=True)

    react_props_first: bool = Field(default=True, alias="reactPropsFirst")
    react_props_list: List[str] = Field(
        default_factory=lambda: list(DEFAULT_REACT_PROPS),
        alias="reactPropsList",
    )

    def to_options(self) -> OrderOptions:
        return OrderOptions(
            react_props_first=self.react_props_first,
            react_props_list=tuple(self.react_props_list),
        )


class TextEditDTO(BaseModel):
    start: int
    end: int
    replacement: str


class FindingDTO(BaseModel):
    path: str
    line: int
    column: int
    message: str
    detail: str = ""
    fix: Optional[TextEditDTO] = None


class CheckResponseDTO(BaseModel):
    findings: List[FindingDTO] = []
    skipped: List[str] = []
    warnings: List[str] = []
    errors: List[str] = []


def options_from_payload(payload: Dict[str, Any] | None) -> OrderOptions:
    try:
        dto = SortPropsOptionsDTO.model_validate(payload or {})
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return dto.to_options()


def options_json_schema() -> Dict[str, Any]:
    return SortPropsOptionsDTO.model_json_schema(by_alias=True)


def finding_dto(finding: Finding, *, path: str) -> FindingDTO:
    fix = None
    if finding.fix is not None:
        fix = TextEditDTO(
            start=finding.fix.span[0],
            end=finding.fix.span[1],
            replacement=finding.fix.replacement,
        )
    return FindingDTO(
        path=path,
        line=finding.line,
        column=finding.column,
        message=finding.message,
        detail=finding.detail,
        fix=fix,
    )


def report_dto(report: CheckReport, *, path: str) -> CheckResponseDTO:
    return CheckResponseDTO(
        findings=[finding_dto(item, path=path) for item in report.findings],
        skipped=list(report.skipped),
        warnings=list(report.warnings),
    )
