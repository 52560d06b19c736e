HOSTED_CONTENTS = (bytes(range(256)) * 2)[:500]
ARCHIVE_CONTENTS = b"A" * 100 + b"B" * 100 + b"C" * 100


def auth(key: str) -> dict[str, str]:
    return {"Authorization": key}
