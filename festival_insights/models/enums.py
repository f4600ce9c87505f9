"""
Enumeration definitions for the Festival Insights backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic serialization and
deserialization in API responses. Values match the strings the dashboard
frontend already renders.
"""

from enum import Enum


class CorrelationStrength(str, Enum):
    """
    Strength bucket for a Pearson coefficient, ordered by |coefficient|.

    - strong:   |r| >= 0.7
    - moderate: |r| >= 0.4
    - weak:     |r| >= 0.2
    - none:     |r| <  0.2
    """
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    NONE = "none"


class Priority(str, Enum):
    """Priority attached to a synthesized action item."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HashtagColor(str, Enum):
    """
    Trending classification supplied by the hashtag vendor.

    Treated as opaque: the vendor does not document how it is derived.
    - green: trending now
    - blue: steady / long-term
    - red: overused
    """
    GREEN = "green"
    BLUE = "blue"
    RED = "red"


class Platform(str, Enum):
    """Social platform a tracked link was shared on (utm_source)."""
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"


class ContentMedium(str, Enum):
    """Content format a tracked link was attached to (utm_medium)."""
    POST = "post"
    STORY = "story"
    REEL = "reel"
    AD = "ad"


class ReportStatus(str, Enum):
    """Tag of the AnalyzerOutcome variant."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class UnavailableReason(str, Enum):
    """
    Why an analyzer produced no report.

    - not_connected: the backing data source has no rows at all
    - no_data: the source has rows, but none inside the lookback window
    - insufficient_data: too few matched days / qualifying items to conclude
    - unreliable_data: the Data-Quality Guard rejected a required series
    - failed: the analyzer raised (upstream read failure); isolated by the
      full-report orchestrator
    """
    NOT_CONNECTED = "not_connected"
    NO_DATA = "no_data"
    INSUFFICIENT_DATA = "insufficient_data"
    UNRELIABLE_DATA = "unreliable_data"
    FAILED = "failed"


class DataSource(str, Enum):
    """Warehouse sources that back one analyzer each."""
    WEATHER = "weather"
    HASHTAGS = "hashtags"
    SENTIMENT = "sentiment"
    ATTRIBUTION = "attribution"
