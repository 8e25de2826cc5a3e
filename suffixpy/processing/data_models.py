"""Data models for passing information between pipeline stages."""

from pydantic import BaseModel, Field

from suffixpy.core.types import Match
from suffixpy.index.builder import SuffixIndex


class StageResult(BaseModel):
    """Base class for stage results with timing."""

    elapsed_time: float = Field(0.0, ge=0)


class InputData(StageResult):
    """Output from the input loading stage."""

    text: str = ""
    patterns: list[str] = Field(default_factory=list)


class IndexBuildResult(StageResult):
    """Output from the index build stage."""

    index: SuffixIndex

    model_config = {
        "arbitrary_types_allowed": True,  # For SuffixIndex
    }


class QueryResult(StageResult):
    """Output from the search stage.

    ``matches`` maps each pattern to its matches sorted by start; the keys
    keep input pattern order.
    """

    matches: dict[str, list] = Field(default_factory=dict)

    @property
    def match_count(self) -> int:
        return sum(len(found) for found in self.matches.values())


class SearchRunResult(StageResult):
    """Everything a search run produced."""

    input_data: InputData
    index_result: IndexBuildResult
    query_result: QueryResult
    output_path: str | None = None

    model_config = {
        "arbitrary_types_allowed": True,
    }

    @property
    def matches(self) -> dict[str, list[Match]]:
        return self.query_result.matches
