PAGE_SIZE = 10

# Offsets are bound as signed 64-bit integers by the SQL drivers
MAX_INT64 = 2**63 - 1

def resolve_offset(raw: str | None) -> int:
    """Turn the ``p`` query parameter into a skip offset.

    Unparsable or missing input counts as page 0, and so does a page number
    whose offset would not fit in a 64-bit integer. Pages 0 and 1 both land
    on offset 0; only page 2 and above advance by ``PAGE_SIZE``.
    """
    try:
        parsed = int(raw) if raw is not None else 0
    except ValueError:
        parsed = 0
    page = parsed - 1
    if page < 1 or page * PAGE_SIZE > MAX_INT64:
        return 0
    return page * PAGE_SIZE
