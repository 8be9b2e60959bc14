"""Tests for the aggregation engine."""

import pytest

from storerate.errors import NotFoundError
from storerate.models.enums import Role
from storerate.models.rating import Rating
from storerate.services.aggregation import AggregationEngine
from storerate.services.lifecycle import DirectoryService


@pytest.fixture
def raters(create_user):
    return [create_user(f"rater{i}@example.com") for i in range(4)]


def _rate(db, user, store, value):
    db.add(Rating(user_id=user.id, store_id=store.id, value=value))
    db.commit()


def test_summary_without_ratings_is_zero(db, store):
    """Test an unrated store averages 0, never None."""
    summary = AggregationEngine(db).store_summary(store.id)

    assert summary.average_rating == 0
    assert isinstance(summary.average_rating, float)
    assert summary.total_ratings == 0


def test_summary_rounds_to_two_places(db, store, raters):
    """Test the average is rounded for display."""
    for user, value in zip(raters[:3], [5, 4, 4], strict=True):
        _rate(db, user, store, value)

    summary = AggregationEngine(db).store_summary(store.id)
    assert summary.average_rating == 4.33
    assert summary.total_ratings == 3


def test_summary_unknown_store(db):
    """Test summary for a missing store is NotFound."""
    with pytest.raises(NotFoundError):
        AggregationEngine(db).store_summary(12345)


def test_distribution_is_dense_and_sums_to_total(db, store, raters):
    """Test every value 5..1 is present and counts add up to the total."""
    for user, value in zip(raters, [5, 5, 3, 1], strict=True):
        _rate(db, user, store, value)

    engine = AggregationEngine(db)
    distribution = engine.rating_distribution(store.id)

    assert [bucket.value for bucket in distribution] == [5, 4, 3, 2, 1]
    assert [bucket.count for bucket in distribution] == [2, 0, 1, 0, 1]
    assert sum(bucket.count for bucket in distribution) == engine.store_summary(store.id).total_ratings


def test_distribution_of_unrated_store(db, store):
    """Test an unrated store has all-zero buckets."""
    distribution = AggregationEngine(db).rating_distribution(store.id)
    assert all(bucket.count == 0 for bucket in distribution)


def test_top_stores(db, create_store, raters):
    """Test leaderboard excludes unrated stores, sorts descending and truncates."""
    best = create_store(name="Best Rated Store In Town")
    middle = create_store(name="Middle Rated Store In Town")
    worst = create_store(name="Worst Rated Store In Town")
    create_store(name="Never Rated Store In Town")

    _rate(db, raters[0], best, 5)
    _rate(db, raters[1], best, 4)
    _rate(db, raters[0], middle, 3)
    _rate(db, raters[0], worst, 1)

    engine = AggregationEngine(db)
    top = engine.top_stores(10)

    assert [s.store_id for s in top] == [best.id, middle.id, worst.id]
    assert top[0].average_rating == 4.5
    assert top[0].total_ratings == 2
    assert all(s.total_ratings > 0 for s in top)

    assert [s.store_id for s in engine.top_stores(2)] == [best.id, middle.id]
    assert engine.top_stores(0) == []


def test_top_stores_ties_break_by_id(db, create_store, raters):
    """Test equal averages keep creation order."""
    first = create_store(name="First Equal Store Created")
    second = create_store(name="Second Equal Store Created")
    _rate(db, raters[0], second, 4)
    _rate(db, raters[0], first, 4)

    top = AggregationEngine(db).top_stores(5)
    assert [s.store_id for s in top] == [first.id, second.id]


def test_platform_counts(db, create_user, store, raters):
    """Test platform totals and per-role counts."""
    create_user("admin@example.com", role=Role.ADMIN)
    create_user("owner@example.com", role=Role.STORE_OWNER, store_id=store.id)
    _rate(db, raters[0], store, 4)
    _rate(db, raters[1], store, 2)

    counts = AggregationEngine(db).platform_counts()

    assert counts.total_users == 6
    assert counts.total_stores == 1
    assert counts.total_ratings == 2
    assert counts.users_by_role == {"admin": 1, "user": 4, "store_owner": 1}


def test_platform_counts_empty(db):
    """Test every role is present even with no users."""
    counts = AggregationEngine(db).platform_counts()
    assert counts.total_users == 0
    assert counts.users_by_role == {"admin": 0, "user": 0, "store_owner": 0}


def test_recent_ratings_newest_first(db, create_store, raters):
    """Test recent ratings include names and are limited."""
    store_a = create_store(name="Recent Ratings Store Alpha")
    store_b = create_store(name="Recent Ratings Store Bravo")
    _rate(db, raters[0], store_a, 3)
    _rate(db, raters[1], store_b, 5)

    recent = AggregationEngine(db).recent_ratings(1)

    assert len(recent) == 1
    assert recent[0].store_name == "Recent Ratings Store Bravo"
    assert recent[0].user_id == raters[1].id
    assert recent[0].value == 5


def test_store_raters(db, store, raters):
    """Test raters carry user details and their rating."""
    _rate(db, raters[0], store, 2)
    _rate(db, raters[1], store, 4)

    entries = AggregationEngine(db).store_raters(store.id)

    assert {(e.email, e.value) for e in entries} == {
        ("rater0@example.com", 2),
        ("rater1@example.com", 4),
    }


def test_deleted_store_cascades_and_is_not_found(db, store, raters):
    """Test deleting a store removes its ratings and later summaries are NotFound."""
    _rate(db, raters[0], store, 5)
    _rate(db, raters[1], store, 3)
    store_id = store.id

    DirectoryService(db).delete_store(store_id)

    assert db.query(Rating).filter(Rating.store_id == store_id).count() == 0
    with pytest.raises(NotFoundError):
        AggregationEngine(db).store_summary(store_id)
