"""
Pydantic request/response models for the Festival Insights backend.

This module provides type-safe data validation and serialization for the
correlation engine: the warehouse records it consumes, the intermediate
aligned series it builds, and the reports it returns to the dashboard.

Field names are camelCase because the dashboard consumes these payloads
directly as JSON.

Model groups:
- Warehouse input records: DailyMetricPoint, WeatherDay, EngagementDay,
  SentimentDay, HashtagUsage, ClickEvent
- Alignment: AlignedSeries, AlignedSeriesPair
- Statistics: CorrelationResult, DataQualityAssessment
- Domain reports: WeatherEngagementReport, HashtagPerformanceReport,
  SentimentGrowthReport, AttributionROIReport
- Tagged outcomes: WeatherOutcome, HashtagOutcome, SentimentOutcome,
  AttributionOutcome (available | unavailable)
- Synthesis: ActionItem, FullInsightsReport, DataQualityResponse

All models use Pydantic v2 syntax. Every model is treated as an immutable
snapshot: a recomputation builds new instances instead of mutating old ones.
"""

from datetime import date as DateType, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from festival_insights.models.enums import (
    CorrelationStrength,
    HashtagColor,
    Priority,
    ReportStatus,
    UnavailableReason,
)


# =============================================================================
# Warehouse Input Records
# =============================================================================


class DailyMetricPoint(BaseModel):
    """
    Atomic unit of every daily time series.

    A value of None means the metric was not measured that day, which is
    different from a measured zero.
    """
    model_config = ConfigDict(frozen=True)

    date: DateType = Field(..., description="Calendar date (no time of day)")
    value: Optional[float] = Field(None, description="Metric value, None when not measured")


class WeatherDay(BaseModel):
    """One row of fact_weather_daily."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {"date": "2026-07-14", "tempAvg": 24.5, "rain": 0.0}
        },
    )

    date: DateType
    tempAvg: Optional[float] = Field(None, description="Daily average temperature (°C)")
    rain: Optional[float] = Field(None, description="Daily precipitation (mm)")


class EngagementDay(BaseModel):
    """
    One day of account-level insights, summed across connected accounts.

    followers is a cumulative count (page follows) rather than a daily delta.
    """
    model_config = ConfigDict(frozen=True)

    date: DateType
    engagement: Optional[float] = Field(None, description="Total engagement actions")
    reach: Optional[float] = Field(None, description="Total unique reach")
    followers: Optional[float] = Field(None, description="Cumulative follower count")


class SentimentDay(BaseModel):
    """One row of agg_sentiment_daily."""
    model_config = ConfigDict(frozen=True)

    date: DateType
    avgSentimentScore: float = Field(..., description="Mean sentiment, roughly -1..1")


class HashtagUsage(BaseModel):
    """
    One use of a hashtag on one piece of content, pre-joined to that
    content's latest performance snapshot.

    engagement/reach are None when the content has no snapshot yet; the use
    still counts toward timesUsed.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "hashtag": "#festival2026",
                "color": "green",
                "engagement": 420,
                "reach": 9800,
            }
        },
    )

    hashtag: str
    color: Optional[HashtagColor] = Field(
        None, description="Vendor trending classification (opaque)"
    )
    engagement: Optional[float] = Field(
        None, description="likes + comments + shares + saves"
    )
    reach: Optional[float] = None

    @field_validator('color', mode='before')
    @classmethod
    def _normalize_color(cls, value: Any) -> Optional[str]:
        # Unknown vendor colours are treated as unclassified
        if value is None:
            return None
        normalized = str(value).strip().lower()
        if normalized in {c.value for c in HashtagColor}:
            return normalized
        return None


class ClickEvent(BaseModel):
    """One tracked-link click with its UTM tags and conversion outcome."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    utmSource: Optional[str] = None
    utmMedium: Optional[str] = None
    converted: bool = False
    conversionValue: Optional[float] = None


# =============================================================================
# Alignment
# =============================================================================


class AlignedSeries(BaseModel):
    """
    Inner join of several named daily series on calendar date.

    Every list in `values` is index-aligned with `dates`, which are ISO date
    strings in ascending order.
    """
    model_config = ConfigDict(frozen=True)

    dates: List[str] = Field(default_factory=list)
    values: Dict[str, List[float]] = Field(default_factory=dict)

    @model_validator(mode='after')
    def _check_alignment(self) -> 'AlignedSeries':
        for name, column in self.values.items():
            if len(column) != len(self.dates):
                raise ValueError(
                    f"Series '{name}' has {len(column)} values for {len(self.dates)} dates"
                )
        return self

    @property
    def size(self) -> int:
        return len(self.dates)

    def column(self, name: str) -> List[float]:
        return self.values[name]


class AlignedSeriesPair(BaseModel):
    """Two index-aligned series sharing the same dates."""
    model_config = ConfigDict(frozen=True)

    dates: List[str] = Field(default_factory=list)
    x: List[float] = Field(default_factory=list)
    y: List[float] = Field(default_factory=list)

    @model_validator(mode='after')
    def _check_lengths(self) -> 'AlignedSeriesPair':
        if not (len(self.x) == len(self.y) == len(self.dates)):
            raise ValueError(
                f"Aligned pair lengths differ: dates={len(self.dates)}, "
                f"x={len(self.x)}, y={len(self.y)}"
            )
        return self


# =============================================================================
# Statistics
# =============================================================================


class CorrelationResult(BaseModel):
    """
    Pearson correlation between two aligned series.

    A coefficient of exactly 0 with sampleSize < 2 means "not enough data",
    not "no relationship"; callers must check sampleSize before acting.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "coefficient": 0.82,
                "strength": "strong",
                "sampleSize": 30,
                "pValue": 0.00003,
                "insight": "Strong positive correlation (0.82) between temperature and engagement.",
            }
        },
    )

    coefficient: float = Field(..., ge=-1.0, le=1.0)
    strength: CorrelationStrength
    sampleSize: int = Field(..., ge=0)
    pValue: Optional[float] = Field(
        None, ge=0.0, le=1.0, description="Two-sided t-test p-value; None when untestable"
    )
    insight: str

    @model_validator(mode='after')
    def _zero_when_undersampled(self) -> 'CorrelationResult':
        if self.sampleSize < 2 and self.coefficient != 0:
            raise ValueError("coefficient must be 0 when sampleSize < 2")
        return self


class DataQualityAssessment(BaseModel):
    """
    Density check for one metric series over a lookback window.

    Derived on every request and never persisted. When isReliable is False,
    warnings must be surfaced to any narrative built on this metric.
    """
    model_config = ConfigDict(frozen=True)

    metric: str
    windowDays: int = Field(..., ge=0)
    totalDays: int = Field(..., ge=0, description="Rows returned for the window")
    populatedDays: int = Field(..., ge=0, description="Rows with a non-zero measured value")
    zeroDays: int = Field(..., ge=0, description="Rows with a measured value of exactly 0")
    missingDays: int = Field(..., ge=0, description="Window days without a populated value")
    minPopulatedDays: int = Field(..., ge=0)
    coverageRatio: float = Field(..., ge=0.0, le=1.0)
    isReliable: bool
    suppressGrowthClaims: bool = False
    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# Domain Reports
# =============================================================================


class AnalysisPeriod(BaseModel):
    """Lookback window an analysis covers (inclusive dates)."""
    model_config = ConfigDict(frozen=True)

    startDate: DateType
    endDate: DateType
    days: int = Field(..., ge=1)


class WeatherCorrelations(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperatureVsEngagement: CorrelationResult
    temperatureVsReach: CorrelationResult
    rainVsEngagement: CorrelationResult
    sunnyDaysEngagement: float = Field(..., description="Mean engagement on days without rain")
    rainyDaysEngagement: float = Field(..., description="Mean engagement on days with rain")
    sunnyDays: int = Field(..., ge=0)
    rainyDays: int = Field(..., ge=0)


class WeatherEngagementReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: AnalysisPeriod
    correlations: WeatherCorrelations
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class HashtagPerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    hashtag: str
    avgEngagementRate: float = Field(..., description="totalEngagement / totalReach × 100")
    avgReach: float
    timesUsed: int = Field(..., ge=1)
    color: Optional[HashtagColor] = None


class ColorBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    avgEngagement: float = 0.0
    count: int = Field(0, ge=0)


class ColorCorrelation(BaseModel):
    model_config = ConfigDict(frozen=True)

    green: ColorBucket = Field(default_factory=ColorBucket)
    blue: ColorBucket = Field(default_factory=ColorBucket)
    red: ColorBucket = Field(default_factory=ColorBucket)


class HashtagPerformanceReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: AnalysisPeriod
    topPerformers: List[HashtagPerformance] = Field(default_factory=list)
    worstPerformers: List[HashtagPerformance] = Field(default_factory=list)
    colorCorrelation: ColorCorrelation
    insights: List[str] = Field(default_factory=list)


class GrowthBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    avgFollowerGrowth: float = 0.0
    count: int = Field(0, ge=0)


class SentimentImpact(BaseModel):
    model_config = ConfigDict(frozen=True)

    highPositiveDays: GrowthBucket
    highNegativeDays: GrowthBucket
    neutralDays: GrowthBucket


class SentimentGrowthReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: AnalysisPeriod
    correlation: CorrelationResult
    sentimentImpact: SentimentImpact
    followerDataQuality: DataQualityAssessment
    insights: List[str] = Field(default_factory=list)


class PlatformStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    clicks: int = Field(0, ge=0)
    conversions: int = Field(0, ge=0)
    rate: float = Field(0.0, description="conversions / clicks × 100")
    value: float = Field(0.0, description="Summed conversion value")


class PlatformBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    facebook: PlatformStats
    instagram: PlatformStats


class MediumStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    clicks: int = Field(0, ge=0)
    conversions: int = Field(0, ge=0)
    rate: float = 0.0


class MediumBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    post: MediumStats
    story: MediumStats
    reel: MediumStats
    ad: MediumStats


class TopConvertingContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    contentType: str
    conversionRate: float
    avgValue: float = Field(..., description="Mean conversion value per conversion")
    clicks: int = Field(..., ge=0)


class AttributionROIReport(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "byPlatform": {
                    "facebook": {"clicks": 100, "conversions": 10, "rate": 10.0, "value": 450.0},
                    "instagram": {"clicks": 100, "conversions": 4, "rate": 4.0, "value": 180.0},
                },
                "insights": ["Facebook has 150% higher conversion rate than Instagram"],
            }
        },
    )

    period: AnalysisPeriod
    byPlatform: PlatformBreakdown
    byMedium: MediumBreakdown
    unattributedClicks: int = Field(0, ge=0, description="Clicks from neither platform")
    topConverting: List[TopConvertingContent] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


# =============================================================================
# Tagged Analyzer Outcomes
# =============================================================================


class AnalyzerOutcome(BaseModel):
    """
    Tagged variant returned by every analyzer: available(data) or
    unavailable(reason).

    Subclasses declare the concrete `data` type. Consumers branch on
    `status` (or `is_available`) instead of testing data for truthiness.
    """
    model_config = ConfigDict(frozen=True)

    status: ReportStatus
    reason: Optional[UnavailableReason] = None
    detail: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    @model_validator(mode='after')
    def _check_variant(self) -> 'AnalyzerOutcome':
        data = getattr(self, 'data', None)
        if self.status == ReportStatus.AVAILABLE:
            if data is None or self.reason is not None:
                raise ValueError("available outcome requires data and no reason")
        else:
            if data is not None or self.reason is None:
                raise ValueError("unavailable outcome requires a reason and no data")
        return self

    @property
    def is_available(self) -> bool:
        return self.status == ReportStatus.AVAILABLE

    @classmethod
    def available(cls, data: Any, warnings: Optional[List[str]] = None):
        return cls(status=ReportStatus.AVAILABLE, data=data, warnings=warnings or [])

    @classmethod
    def unavailable(
        cls,
        reason: UnavailableReason,
        detail: Optional[str] = None,
        warnings: Optional[List[str]] = None,
    ):
        return cls(
            status=ReportStatus.UNAVAILABLE,
            reason=reason,
            detail=detail,
            warnings=warnings or [],
        )


class WeatherOutcome(AnalyzerOutcome):
    data: Optional[WeatherEngagementReport] = None


class HashtagOutcome(AnalyzerOutcome):
    data: Optional[HashtagPerformanceReport] = None


class SentimentOutcome(AnalyzerOutcome):
    data: Optional[SentimentGrowthReport] = None


class AttributionOutcome(AnalyzerOutcome):
    data: Optional[AttributionROIReport] = None


# =============================================================================
# Synthesis
# =============================================================================


class ActionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: Priority
    action: str
    expectedImpact: str


class FullInsightsReport(BaseModel):
    """
    All four domain outcomes for one lookback window plus the merged
    insights, prioritized action items and data-quality context.

    actionItems is never empty.
    """
    model_config = ConfigDict(frozen=True)

    period: AnalysisPeriod
    weather: WeatherOutcome
    hashtags: HashtagOutcome
    sentiment: SentimentOutcome
    attribution: AttributionOutcome
    keyInsights: List[str] = Field(default_factory=list)
    actionItems: List[ActionItem] = Field(..., min_length=1)
    dataQuality: List[DataQualityAssessment] = Field(default_factory=list)
    narrativeConstraints: List[str] = Field(
        default_factory=list,
        description="Hard constraints for any narrative generated from raw metrics",
    )


class DataQualityResponse(BaseModel):
    """Account-level data-quality view for one lookback window."""
    model_config = ConfigDict(frozen=True)

    period: AnalysisPeriod
    assessments: List[DataQualityAssessment] = Field(default_factory=list)
    narrativeConstraints: List[str] = Field(default_factory=list)
