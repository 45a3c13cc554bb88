"""
Unit tests for SourceOptions configuration dataclass.
"""

import pytest

from eventpager.config import MAX_EVENT_SEQ, SourceOptions


@pytest.mark.unit
class TestSourceOptions:
    """Test SourceOptions dataclass."""

    def test_defaults(self) -> None:
        options = SourceOptions(table_name="events")

        assert options.region == "us-east-1"
        assert options.endpoint_url is None
        assert options.page_limit == 50
        assert options.pk_name == "pk"
        assert options.sk_name == "sk"

    @pytest.mark.parametrize(
        "kwargs,match",
        [
            ({"table_name": ""}, "table_name"),
            ({"table_name": "events", "page_limit": 0}, "page_limit"),
            ({"table_name": "events", "max_attempts": 0}, "max_attempts"),
        ],
    )
    def test_invalid_values(self, kwargs, match) -> None:
        with pytest.raises(ValueError, match=match):
            SourceOptions(**kwargs)

    def test_botocore_config(self) -> None:
        options = SourceOptions(
            table_name="events",
            region="eu-south-1",
            connect_timeout=1.5,
            read_timeout=7.0,
            max_attempts=5,
        )

        config = options.to_botocore_config()

        assert config.region_name == "eu-south-1"
        assert config.connect_timeout == 1.5
        assert config.read_timeout == 7.0
        assert config.retries == {"max_attempts": 5, "mode": "standard"}

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("EVENTPAGER_TABLE", "bridge_events")
        monkeypatch.setenv("EVENTPAGER_REGION", "eu-west-1")
        monkeypatch.setenv("EVENTPAGER_ENDPOINT_URL", "http://localhost:4566")
        monkeypatch.setenv("EVENTPAGER_PAGE_LIMIT", "10")

        options = SourceOptions.from_env()

        assert options.table_name == "bridge_events"
        assert options.region == "eu-west-1"
        assert options.endpoint_url == "http://localhost:4566"
        assert options.page_limit == 10

    def test_from_env_missing_table(self, monkeypatch) -> None:
        monkeypatch.delenv("EVENTPAGER_TABLE", raising=False)

        with pytest.raises(ValueError, match="EVENTPAGER_TABLE"):
            SourceOptions.from_env()

    def test_max_event_seq_is_u16_max(self) -> None:
        assert MAX_EVENT_SEQ == 2**16 - 1
