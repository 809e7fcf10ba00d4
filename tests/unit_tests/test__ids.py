import re
import time

from catalog_db.ids import generate_id


def test_generate_id__prefix_then_digits():
    record_id = generate_id("prod_")
    assert re.fullmatch(r"prod_\d+", record_id)


def test_generate_id__starts_with_current_millis():
    before = int(time.time() * 1000)
    record_id = generate_id("cat_")
    after = int(time.time() * 1000)

    millis = int(record_id[len("cat_"):len("cat_") + 13])
    assert before <= millis <= after


def test_generate_id__fixed_width():
    assert len({len(generate_id("prod_")) for _ in range(100)}) == 1


def test_generate_id__no_duplicates_within_same_millisecond():
    ids = [generate_id("prod_") for _ in range(10_000)]
    assert len(set(ids)) == len(ids)


def test_generate_id__empty_prefix():
    assert generate_id().isdigit()
