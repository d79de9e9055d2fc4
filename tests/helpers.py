def assert_invariants(entries):
    ids = [e.id for e in entries]
    assert len(ids) == len(set(ids))
    for e in entries:
        assert e.text == e.text.strip()
        assert e.seconds is None or e.seconds >= 0


def snapshot(entries):
    return [(e.id, e.text, e.seconds) for e in entries]
