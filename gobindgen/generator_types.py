from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gobindgen.data_types import DeclarationKind


class GenerationOutcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class DeclarationResult:
    name: str
    kind: DeclarationKind
    outcome: GenerationOutcome
    # synthesis results and wrapper types, in emission order
    items: tuple = ()
    error: Optional[str] = None


@dataclass
class GenerationReport:
    results: list[DeclarationResult] = field(default_factory=list)

    def add(self, result: DeclarationResult):
        self.results.append(result)

    def _with(self, outcome: GenerationOutcome) -> list[DeclarationResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def succeeded(self) -> list[DeclarationResult]:
        return self._with(GenerationOutcome.SUCCESS)

    @property
    def failed(self) -> list[DeclarationResult]:
        return self._with(GenerationOutcome.FAILURE)

    @property
    def skipped(self) -> list[DeclarationResult]:
        return self._with(GenerationOutcome.SKIPPED)

    @property
    def any_failed(self) -> bool:
        return bool(self.failed)

    @property
    def items(self) -> list:
        return [item for r in self.succeeded for item in r.items]

    def summary(self) -> str:
        lines = [
            f"{len(self.succeeded)} generated, {len(self.failed)} failed, {len(self.skipped)} skipped"
        ]
        for result in self.failed:
            lines.append(f"  {result.kind.name.lower()} {result.name}: {result.error}")
        return "\n".join(lines)
