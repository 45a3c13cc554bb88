"""
Integration tests for DynamoEventSource and EventPaginator against LocalStack.
"""

import pytest

from eventpager import DynamoEventSource, EventClient, EventPaginator, MoveEventModule
from tests.helpers.events import make_event


@pytest.fixture
def seeded_stream(localstack_helper, clean_events_table, bridge_filter):
    """
    Seeds a stream where transaction T1 spans several pages of two records.
    """
    stream = [
        make_event("T1", 0),
        make_event("T1", 1),
        make_event("T1", 2),
        make_event("T2", 0),
        make_event("T3", 0),
        make_event("T3", 1),
    ]
    localstack_helper.seed_events(clean_events_table, bridge_filter, stream)
    return stream


@pytest.mark.integration
class TestDynamoEventSourceIntegration:
    def test_query_pages_in_sort_key_order(
        self, seeded_stream, integration_options, localstack_client, bridge_filter
    ):
        source = DynamoEventSource(integration_options, client=localstack_client)

        page = source.query_events(bridge_filter, seeded_stream[0].id)

        assert page.data == seeded_stream[1:3]
        assert page.has_next_page is True

    def test_other_partition_is_empty(
        self, seeded_stream, integration_options, localstack_client
    ):
        source = DynamoEventSource(integration_options, client=localstack_client)
        other = MoveEventModule(package="0xdead", module="bridge")

        page = source.query_events(other, seeded_stream[0].id)

        assert page.data == []
        assert page.has_next_page is False

    def test_paginator_reassembles_stream(
        self, seeded_stream, integration_options, localstack_client, bridge_filter
    ):
        paginator = EventPaginator(DynamoEventSource(integration_options, client=localstack_client))

        pages = list(paginator.iter_pages(bridge_filter, "T0"))

        assert [e for page in pages for e in page.items] == seeded_stream
        assert pages[0].next_cursor == "T1"
        assert pages[0].has_more is True
        assert pages[-1].has_more is False

    def test_connect_reads_chain_meta(
        self, localstack_helper, clean_events_table, integration_options, localstack_client
    ):
        localstack_helper.put_chain_meta(clean_events_table, "35834a8a", 42)

        client = EventClient.connect(integration_options, client=localstack_client)

        assert client.describe().latest_checkpoint == 42
