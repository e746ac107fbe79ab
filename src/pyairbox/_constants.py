"""Internal constants shared across the library."""

FEED_URL_TEMPLATE = "https://pm25.lass-net.org/API-1.0.0/device/{device_id}/latest/?format=JSON"
USER_AGENT = "pyairbox"

# Cosmos layout used by the deployed sync job.
DATABASE_ID = "ToDoList"
CONTAINER_ID = "Items"
DIRECTORY_ID = "AirBoxes"
PARTITION_KEY_PATH = "/partitionKey"

# Keys Cosmos adds to every stored document.
COSMOS_SYSTEM_KEYS: frozenset[str] = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts", "_lsn"})
