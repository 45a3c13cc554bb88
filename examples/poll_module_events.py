"""
Module Event Polling Example

Reads every event a module has emitted since a known transaction,
one whole transaction batch at a time, against a local DynamoDB
events table (e.g. LocalStack).
"""

import logging

from eventpager import EventClient, MoveEventModule, SourceOptions

logging.basicConfig(level=logging.INFO)

options = SourceOptions(
    table_name="bridge_events",
    region="eu-south-1",
    endpoint_url="http://localhost:4566",
    page_limit=25,
)

client = EventClient.connect(options)

bridge = MoveEventModule(
    package="0x000000000000000000000000000000000000000000000000000000000000000b",
    module="bridge",
)

# Exclusive start. "0" sorts before every base58 transaction digest
cursor = "0"

for page in client.paginator.iter_pages(bridge, cursor):
    for event in page.items:
        print(event.tx_digest, event.id.event_seq, event.event_type, event.parsed_json)
    cursor = page.next_cursor

print(f"Caught up. Resume later from transaction {cursor}")
