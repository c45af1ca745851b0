"""Table names and fixed identifiers shared by the importer and the services."""

CATEGORIES_TABLE = "categories"
ROOMS_TABLE = "rooms"
PROGRESS_TABLE = "user_progress"

# Wipe order respects references: progress -> rooms -> categories
WIPE_ORDER = (PROGRESS_TABLE, ROOMS_TABLE, CATEGORIES_TABLE)

# PostgREST refuses unfiltered deletes; no generated row ever has this id
NIL_UUID = "00000000-0000-0000-0000-000000000000"

ROOM_TITLE_PREFIX = "TryHackMe | "
