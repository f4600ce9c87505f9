'''
Festival Insights Backend Test Suite

Test Modules:
-------------
- test_correlation.py: Pearson coefficient, strength buckets, insight text,
  percentage change, p-values
- test_alignment.py: Date-keyed inner join, duplicate rejection, daily deltas
- test_data_quality.py: Populated-day accounting, follower suppression,
  narrative constraints
- test_weather_engagement.py: Temperature/rain correlation, sunny vs rainy
- test_hashtag_performance.py: Rate ranking, min_usage cut, colour buckets
- test_sentiment_growth.py: Sentiment vs follower growth, sparse-data guard
- test_attribution_roi.py: Platform and medium conversion breakdown
- test_synthesizer.py: Report synthesis, pre-check gating, failure isolation
- test_warehouse.py: Row mapping against a mocked asyncpg pool
- test_database.py: Pool lifecycle with asyncpg.create_pool patched
- test_config.py: Settings defaults and lookback validation
- test_api.py: Endpoint contracts through FastAPI's TestClient

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Test Dependencies:
------------------
- pytest
- pytest-asyncio
- httpx (FastAPI TestClient)

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

# This file enables pytest discovery of the tests directory

__all__ = []
