# backend/tests/test_bks.py
import datetime
from decimal import Decimal

import pytest

from conftest import BKS_DIR, INSTANCES_DIR
from core.exceptions import NotFoundError, ParseError
from models.solution import Solution
from models.verification import Bks, Comparison
from services.bks import compare, parse_bks_file_name, read_bks
from services.db import Db, read_instances

BEST = Bks(routes=10, distance=Decimal("1000"), date=datetime.date(2020, 1, 1))


@pytest.mark.parametrize(
    "routes,distance,expected",
    [
        (9, "5000", Comparison.BETTER),
        (11, "1", Comparison.WORSE),
        (10, "999.998", Comparison.BETTER),
        (10, "999.9995", Comparison.EQUAL),
        (10, "1000.0005", Comparison.EQUAL),
        (10, "1000.002", Comparison.WORSE),
    ],
)
def test_compare(routes, distance, expected):
    assert compare(routes, Decimal(distance), BEST) is expected


def test_compare_without_bks():
    assert compare(10, Decimal("1000"), None) is Comparison.BETTER


def test_bks_file_name():
    name, routes, distance = parse_bks_file_name("RC1_4_10.38_8219.72.txt")
    assert (name, routes, distance) == ("rc1_4_10", 38, Decimal("8219.72"))


@pytest.mark.parametrize("bad", ["rc1_4_10.txt", "rc1_4_10", "rc1.x_1.txt", "rc1.2_abc.txt"])
def test_bad_bks_file_name(bad):
    with pytest.raises(ParseError):
        parse_bks_file_name(bad)


# ---------------------------------
# Directory reading
# ---------------------------------


@pytest.fixture(scope="module")
def instances():
    return read_instances(INSTANCES_DIR)


def test_read_instances_skips_broken(instances):
    assert sorted(instances) == ["ring", "ring_pdp"]
    # Li-Lim files carry no name; the file stem stands in
    assert instances["ring_pdp"].name == "ring_pdp"


def test_read_bks_history(instances):
    db = read_bks(instances, str(BKS_DIR))
    history = db["ring"]
    assert [b.date for b in history] == [datetime.date(2023, 1, 15), datetime.date(2024, 3, 1)]
    assert (history[0].routes, history[0].distance) == (2, Decimal("9.5"))
    assert history[0].solution is None
    assert (history[1].routes, history[1].distance) == (2, 8)
    assert history[1].solution.routes == ((1, 2, 3), (4, 5, 6))


def test_read_bks_without_dir(instances):
    assert read_bks(instances, None) == {}


def test_read_bks_skips_broken_entries(instances, tmp_path):
    (tmp_path / "not-a-date").mkdir()
    (tmp_path / "not-a-date" / "ring.2_8.txt").write_text("")
    (tmp_path / "2024-01-01").mkdir()
    (tmp_path / "2024-01-01" / "ring.txt").write_text(
        "Instance name: ring\nAuthors:\nDate:\nReference:\nSolution\nRoute 1: 1 2 3 4 5 6\n"
    )
    (tmp_path / "2024-01-01" / "missing.txt").write_text(
        "Instance name: missing\nAuthors:\nDate:\nReference:\nSolution\nRoute 1: 1\n"
    )
    (tmp_path / "2024-01-02").mkdir()
    (tmp_path / "2024-01-02" / "ring.3_12.0.txt").write_text("")

    db = read_bks(instances, str(tmp_path))
    assert list(db) == ["ring"]
    assert [(b.routes, b.distance) for b in db["ring"]] == [(3, Decimal("12.0"))]


# ---------------------------------
# Db
# ---------------------------------


@pytest.fixture(scope="module")
def db():
    return Db.load(INSTANCES_DIR, BKS_DIR)


def test_db_lookup_is_case_insensitive(db):
    assert db.instance("RING").name == "ring"
    with pytest.raises(NotFoundError) as e:
        db.instance("nope")
    assert str(e.value) == "No such instance: `nope'"


def test_db_bks(db):
    assert len(db.bks("ring")) == 2
    assert db.bks("ring_pdp") == []
    assert db.bks_count == 2
    with pytest.raises(NotFoundError):
        db.bks("nope")


def test_db_check_against_latest_bks(db):
    res = db.check(Solution(instance_name="ring", routes=((1, 2, 3), (4, 5, 6))))
    assert res.comparison is Comparison.EQUAL
    assert res.bks.date == datetime.date(2024, 3, 1)
    assert str(res.verification) == "ring 2 8." + "0" * 39

    res = db.check(Solution(instance_name="ring", routes=((1, 2), (3, 4), (5, 6))))
    assert res.comparison is Comparison.WORSE


def test_db_check_without_history(db):
    res = db.check(Solution(instance_name="ring_pdp", routes=((1, 2, 3, 4), (5, 6))))
    assert res.comparison is Comparison.BETTER
    assert res.bks is None
    assert str(res).endswith(" better (bks: none)")


@pytest.mark.parametrize("bad", ["ring.2_nan.txt", "ring.2_inf.txt", "ring.2_-Infinity.txt", "ring.2_sNaN.txt"])
def test_non_finite_bks_distance(bad):
    with pytest.raises(ParseError):
        parse_bks_file_name(bad)


def test_read_bks_skips_non_finite_names(instances, tmp_path):
    day = tmp_path / "2024-01-01"
    day.mkdir()
    (day / "ring.2_inf.txt").write_text("")
    (day / "ring.2_nan.txt").write_text("")
    (day / "ring.2_7.5.txt").write_text("")

    db = read_bks(instances, str(tmp_path))
    assert [(b.routes, b.distance) for b in db["ring"]] == [(2, Decimal("7.5"))]
