"""
Chart recommendation models.

A recommendation is a tagged variant: ChartKind names the chart family and
each kind has its own dataclass holding exactly the columns it binds. The
chart specification derived from it is declarative and renderer-agnostic
(mark + x/y channels); to_vega_lite() renders it as a Vega-Lite v5 document
bound to a named dataset.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from sheet_insights.core.constants import VEGA_LITE_SCHEMA, DEFAULT_CHART_HEIGHT


class ChartKind(Enum):
    """Chart families, in recommendation priority order."""
    TIME_SERIES = "timeseries"
    BAR = "bar"
    HISTOGRAM = "histogram"
    SCATTER = "scatter"


class Mark(Enum):
    LINE = "line"
    BAR = "bar"
    POINT = "point"
    BINNED_BAR = "binned_bar"


class Role(Enum):
    """Measurement role of a bound column."""
    TEMPORAL = "temporal"
    QUANTITATIVE = "quantitative"
    NOMINAL = "nominal"


class Aggregate(Enum):
    SUM = "sum"
    COUNT = "count"


@dataclass(frozen=True)
class Channel:
    """
    Binding of one visual channel (x or y).

    Attributes:
        field: Bound column name, None for a pure count
        role: Measurement role of the channel
        aggregate: Optional aggregation applied to the field
        bin: Whether the field is binned
        sort: Optional sort order ("-y" sorts descending by the y channel)
        title: Optional axis title
    """
    field: Optional[str]
    role: Role
    aggregate: Optional[Aggregate] = None
    bin: bool = False
    sort: Optional[str] = None
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "field": self.field,
            "role": self.role.value,
            "aggregate": self.aggregate.value if self.aggregate else None,
            "bin": self.bin,
            "sort": self.sort,
            "title": self.title,
        }

    def to_vega_lite(self) -> Dict[str, Any]:
        encoding: Dict[str, Any] = {}
        if self.bin:
            encoding["bin"] = True
        if self.aggregate:
            encoding["aggregate"] = self.aggregate.value
        if self.field is not None:
            encoding["field"] = self.field
        encoding["type"] = self.role.value
        if self.sort:
            encoding["sort"] = self.sort
        if self.title:
            encoding["title"] = self.title
        return encoding


@dataclass(frozen=True)
class ChartSpec:
    """Declarative chart: a mark plus x and y channel bindings."""
    mark: Mark
    x: Channel
    y: Channel

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "mark": self.mark.value,
            "x": self.x.to_dict(),
            "y": self.y.to_dict(),
        }

    def to_vega_lite(self, data_name: str = "table", height: int = DEFAULT_CHART_HEIGHT) -> Dict[str, Any]:
        """
        Render as a Vega-Lite specification.

        Args:
            data_name: Name of the dataset the renderer will insert the coerced rows into
            height: Chart height in pixels (width follows the container)

        Returns:
            Vega-Lite v5 specification dict
        """
        if self.mark is Mark.LINE:
            mark: Any = {"type": "line", "interpolate": "monotone"}
        elif self.mark is Mark.BINNED_BAR:
            mark = "bar"
        else:
            mark = {"type": self.mark.value}

        return {
            "$schema": VEGA_LITE_SCHEMA,
            "width": "container",
            "height": height,
            "data": {"name": data_name},
            "mark": mark,
            "encoding": {
                "x": self.x.to_vega_lite(),
                "y": self.y.to_vega_lite(),
            },
        }


class VisualRecommendation(ABC):
    """
    Base of all chart recommendations.

    Subclasses declare their ChartKind and the columns they bind; title,
    rationale and chart specification are derived deterministically from
    those columns.
    """

    kind: ClassVar[ChartKind]

    @property
    @abstractmethod
    def columns(self) -> List[str]:
        """Bound column names, x channel first."""

    @property
    @abstractmethod
    def title(self) -> str:
        """Human-readable chart title."""

    @property
    @abstractmethod
    def rationale(self) -> str:
        """Short explanation of why the chart was chosen."""

    @property
    @abstractmethod
    def chart_spec(self) -> ChartSpec:
        """Declarative chart specification."""

    def to_dict(self, data_name: str = "table") -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "kind": self.kind.value,
            "title": self.title,
            "rationale": self.rationale,
            "columns": self.columns,
            "chart_spec": self.chart_spec.to_dict(),
            "vega_lite": self.chart_spec.to_vega_lite(data_name),
        }


@dataclass(frozen=True)
class TimeSeriesRecommendation(VisualRecommendation):
    """Line chart of a metric over a date column."""
    date_column: str
    value_column: str

    kind: ClassVar[ChartKind] = ChartKind.TIME_SERIES

    @property
    def columns(self) -> List[str]:
        return [self.date_column, self.value_column]

    @property
    def title(self) -> str:
        return f"{self.value_column} over time"

    @property
    def rationale(self) -> str:
        return f"Auto: detected date ({self.date_column}) + metric ({self.value_column})."

    @property
    def chart_spec(self) -> ChartSpec:
        return ChartSpec(
            mark=Mark.LINE,
            x=Channel(self.date_column, Role.TEMPORAL, title=self.date_column),
            y=Channel(self.value_column, Role.QUANTITATIVE, title=self.value_column),
        )


@dataclass(frozen=True)
class BarRecommendation(VisualRecommendation):
    """Summed metric per category, bars sorted descending."""
    category_column: str
    value_column: str

    kind: ClassVar[ChartKind] = ChartKind.BAR

    @property
    def columns(self) -> List[str]:
        return [self.category_column, self.value_column]

    @property
    def title(self) -> str:
        return f"{self.value_column} by {self.category_column}"

    @property
    def rationale(self) -> str:
        return f"Auto: detected category ({self.category_column}) + metric ({self.value_column})."

    @property
    def chart_spec(self) -> ChartSpec:
        return ChartSpec(
            mark=Mark.BAR,
            x=Channel(self.category_column, Role.NOMINAL, sort="-y", title=self.category_column),
            y=Channel(self.value_column, Role.QUANTITATIVE, aggregate=Aggregate.SUM,
                      title=f"Sum of {self.value_column}"),
        )


@dataclass(frozen=True)
class HistogramRecommendation(VisualRecommendation):
    """Distribution of a single metric."""
    value_column: str

    kind: ClassVar[ChartKind] = ChartKind.HISTOGRAM

    @property
    def columns(self) -> List[str]:
        return [self.value_column]

    @property
    def title(self) -> str:
        return f"Distribution of {self.value_column}"

    @property
    def rationale(self) -> str:
        return f"Auto: numeric distribution of {self.value_column}."

    @property
    def chart_spec(self) -> ChartSpec:
        return ChartSpec(
            mark=Mark.BINNED_BAR,
            x=Channel(self.value_column, Role.QUANTITATIVE, bin=True),
            y=Channel(None, Role.QUANTITATIVE, aggregate=Aggregate.COUNT, title="Count"),
        )


@dataclass(frozen=True)
class ScatterRecommendation(VisualRecommendation):
    """Relationship between two metrics."""
    x_column: str
    y_column: str

    kind: ClassVar[ChartKind] = ChartKind.SCATTER

    @property
    def columns(self) -> List[str]:
        return [self.x_column, self.y_column]

    @property
    def title(self) -> str:
        return f"{self.y_column} vs {self.x_column}"

    @property
    def rationale(self) -> str:
        return f"Auto: relationship between two metrics ({self.x_column}, {self.y_column})."

    @property
    def chart_spec(self) -> ChartSpec:
        return ChartSpec(
            mark=Mark.POINT,
            x=Channel(self.x_column, Role.QUANTITATIVE),
            y=Channel(self.y_column, Role.QUANTITATIVE),
        )
