# schemas.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    DATE = "date"


class ColumnStats(BaseModel):
    # numeric
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    # categorical / date
    unique_values: Optional[int] = None
    most_common: List[str] = Field(default_factory=list)
    # date
    earliest: Optional[str] = None
    latest: Optional[str] = None


class DataColumn(BaseModel):
    name: str
    type: ColumnKind
    summary: ColumnStats = Field(default_factory=ColumnStats)

    def __str__(self) -> str:
        return f"{self.name} ({self.type.value})"


class DataInsight(BaseModel):
    column_name: str
    insight_type: str  # correlation | outlier | trend | distribution
    description: str
    significance: float = Field(ge=0.0, le=1.0)


class DatasetSummary(BaseModel):
    row_count: int
    column_count: int
    columns: List[DataColumn]
    insights: List[DataInsight] = Field(default_factory=list)

    def __str__(self) -> str:
        return ", ".join(map(str, self.columns))

    def columns_of(self, kind: ColumnKind) -> List[DataColumn]:
        return [c for c in self.columns if c.type == kind]


class InsightType(str, Enum):
    INSIGHT = "insight"
    TREND = "trend"
    ANOMALY = "anomaly"


class AIInsight(BaseModel):
    type: InsightType
    title: str
    description: str = ""
    recommendation: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)
