from datetime import date

import pytest

from course_api.errors import ConflictError, NotFoundError
from course_api.models import Edition, FaqItem
from course_api.services.content_repository import ContentRepository


def test_select_orders_by_order_index(db_session):
    repo = ContentRepository(db_session, FaqItem)
    repo.insert({"question": "Vestiaires ?", "answer": "Oui, à la salle.", "order_index": 2})
    repo.insert({"question": "Parking ?", "answer": "Au collège.", "order_index": 1})
    repo.insert({"question": "Douches ?", "answer": "Oui.", "order_index": 3})

    assert [item.question for item in repo.select()] == ["Parking ?", "Vestiaires ?", "Douches ?"]
    assert [item.question for item in repo.select(limit=2)] == ["Parking ?", "Vestiaires ?"]


def test_descending_order_and_filters(db_session, make_edition):
    make_edition(year=2023, status="archived")
    make_edition(year=2024, status="archived")
    make_edition(year=2025)

    repo = ContentRepository(db_session, Edition)
    assert [e.year for e in repo.select(filters={"status": "archived"}, order=("-date",))] == [2024, 2023]
    assert repo.count(filters={"status": "archived"}) == 2
    assert repo.first(order=("-date",)).year == 2025


def test_get_unknown_id_raises_not_found(db_session):
    with pytest.raises(NotFoundError):
        ContentRepository(db_session, FaqItem, "Question FAQ").get("inconnu")


def test_update_keeps_required_columns_on_none(db_session):
    repo = ContentRepository(db_session, FaqItem)
    item = repo.insert({"question": "Chrono ?", "answer": "Puce électronique.", "category": "Course"})

    updated = repo.update(item.id, {"question": None, "category": None})

    assert updated.question == "Chrono ?"
    assert updated.category is None


def test_duplicate_slug_raises_conflict_and_rolls_back(db_session, make_edition):
    make_edition(year=2025)
    repo = ContentRepository(db_session, Edition)

    with pytest.raises(ConflictError):
        repo.insert(
            {
                "slug": "2025",
                "year": 2025,
                "edition_number": 46,
                "date": date(2025, 5, 1),
                "title": "Doublon",
            }
        )

    assert repo.count() == 1


def test_delete_removes_row(db_session):
    repo = ContentRepository(db_session, FaqItem)
    item = repo.insert({"question": "Inscription ?", "answer": "En ligne."})
    repo.delete(item.id)
    assert repo.count() == 0
