from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError

from course_api.errors import ConflictError, NotFoundError
from course_api.models import Edition, ProgramItem, RaceCategory
from course_api.schemas.bundle_schema import ReorderRequest
from course_api.schemas.edition_schema import EditionCreate, EditionUpdate
from course_api.services import admin_service


def _published(db_session):
    db_session.expire_all()
    return db_session.query(Edition).filter(Edition.status == "published").all()


def test_activation_leaves_a_single_published_edition(db_session, make_edition):
    first = make_edition(year=2023)
    second = make_edition(year=2024)
    third = make_edition(year=2025)

    for target in (first, third, second, third):
        admin_service.activate_edition(db_session, target.id)
        published = _published(db_session)
        assert len(published) == 1
        assert published[0].id == target.id

    statuses = {e.year: e.status for e in db_session.query(Edition).all()}
    assert statuses == {2023: "archived", 2024: "archived", 2025: "published"}


def test_activation_of_unknown_edition_changes_nothing(db_session, make_edition):
    current = make_edition(year=2025, status="published")

    with pytest.raises(NotFoundError):
        admin_service.activate_edition(db_session, "inconnue")

    assert [e.id for e in _published(db_session)] == [current.id]


def test_published_status_is_unique_in_database(db_session, make_edition):
    make_edition(year=2024, status="published")
    with pytest.raises(IntegrityError):
        make_edition(year=2025, status="published")
    db_session.rollback()


def test_duplicate_copies_races_and_program(db_session, make_edition, make_race):
    source = make_edition(
        year=2025,
        status="published",
        hero_subtitle="La course du village",
        results_url="https://chrono.ch/2025",
        photos_album_url="https://photos.ch/2025",
    )
    make_race(source, name="Course des As", order_index=1)
    make_race(source, name="Walking", slug="walking", type="walking", order_index=2)
    db_session.add(ProgramItem(edition_id=source.id, time="09:00", label="Remise des dossards", order_index=1))
    db_session.commit()

    copy = admin_service.duplicate_edition(db_session, source.id, 2026)

    assert copy.id != source.id
    assert copy.status == "draft"
    assert copy.slug == "2026"
    assert copy.year == 2026
    assert copy.edition_number == source.edition_number + 1
    assert copy.date == date(2026, 6, 14)
    assert copy.hero_subtitle == "La course du village"
    assert copy.results_url is None
    assert copy.photos_album_url is None

    copied_races = db_session.query(RaceCategory).filter(RaceCategory.edition_id == copy.id).all()
    copied_program = db_session.query(ProgramItem).filter(ProgramItem.edition_id == copy.id).all()
    assert sorted(r.name for r in copied_races) == ["Course des As", "Walking"]
    assert len(copied_program) == 1
    assert db_session.query(RaceCategory).filter(RaceCategory.edition_id == source.id).count() == 2
    assert [e.id for e in _published(db_session)] == [source.id]


def test_duplicate_defaults_to_next_year(db_session, make_edition):
    source = make_edition(year=2025)
    copy = admin_service.duplicate_edition(db_session, source.id)
    assert copy.year == 2026
    assert copy.slug == "2026"


def test_duplicate_slug_collision_is_all_or_nothing(db_session, make_edition, make_race):
    source = make_edition(year=2025)
    make_race(source)
    make_edition(year=2026)

    with pytest.raises(ConflictError):
        admin_service.duplicate_edition(db_session, source.id, 2026)

    assert db_session.query(Edition).count() == 2
    assert db_session.query(RaceCategory).count() == 1


def test_create_edition_is_always_draft(db_session):
    edition = admin_service.create_edition(
        db_session,
        EditionCreate(year=2026, edition_number=46, date=date(2026, 4, 18), title="  Édition 2026 ", slug="2026"),
    )
    assert edition.status == "draft"
    assert edition.title == "Édition 2026"


def test_update_to_published_goes_through_activation(db_session, make_edition):
    old = make_edition(year=2024, status="published")
    new = make_edition(year=2025)

    admin_service.update_edition(db_session, new.id, EditionUpdate(status="published", hero_subtitle="Nouveau"))

    db_session.expire_all()
    assert db_session.get(Edition, old.id).status == "archived"
    refreshed = db_session.get(Edition, new.id)
    assert refreshed.status == "published"
    assert refreshed.hero_subtitle == "Nouveau"


def test_list_editions_filters_and_sorts(db_session, make_edition):
    make_edition(year=2023, status="archived", hero_subtitle="Sous la pluie")
    make_edition(year=2024, status="archived")
    make_edition(year=2025)

    assert [e.year for e in admin_service.list_editions(db_session)] == [2025, 2024, 2023]
    assert [e.year for e in admin_service.list_editions(db_session, status="archived")] == [2024, 2023]
    assert [e.year for e in admin_service.list_editions(db_session, search="pluie")] == [2023]
    assert [e.year for e in admin_service.list_editions(db_session, search="2024")] == [2024]


def test_next_edition_defaults_without_editions(db_session):
    defaults = admin_service.next_edition_defaults(db_session, today=date(2025, 1, 10))
    assert defaults.year == 2025
    assert defaults.edition_number == 1
    assert defaults.slug == "2025"
    assert defaults.based_on_edition_id is None


def test_next_edition_defaults_follow_latest(db_session, make_edition):
    latest = make_edition(year=2025, edition_number=45, date=date(2025, 4, 18))

    defaults = admin_service.next_edition_defaults(db_session, today=date(2025, 5, 1))

    assert defaults.year == 2026
    assert defaults.edition_number == 46
    assert defaults.date == date(2026, 4, 18)
    assert defaults.slug == "2026"
    assert "2026" in defaults.title
    assert defaults.based_on_edition_id == latest.id


def test_next_edition_defaults_skip_past_years(db_session, make_edition):
    make_edition(year=2020, edition_number=40, date=date(2020, 4, 18))
    defaults = admin_service.next_edition_defaults(db_session, today=date(2025, 2, 1))
    assert defaults.year == 2025
    assert defaults.edition_number == 41


def _interrupt_flush(session, flush_context, instances):
    raise RuntimeError("écriture interrompue")


@pytest.fixture
def interrupt_writes(db_session):
    """Fait échouer le prochain flush de la session, une fois les données en place."""
    armed = []

    def arm():
        event.listen(db_session, "before_flush", _interrupt_flush)
        armed.append(True)

    yield arm
    if armed:
        event.remove(db_session, "before_flush", _interrupt_flush)


def test_interrupted_activation_keeps_previous_edition_published(db_session, make_edition, interrupt_writes):
    previous = make_edition(year=2024, status="published")
    target = make_edition(year=2025)
    make_edition(year=2023, status="archived")
    interrupt_writes()

    with pytest.raises(RuntimeError):
        admin_service.activate_edition(db_session, target.id)

    assert [e.id for e in _published(db_session)] == [previous.id]
    statuses = {e.year: e.status for e in db_session.query(Edition).all()}
    assert statuses == {2023: "archived", 2024: "published", 2025: "draft"}


def test_interrupted_reorder_keeps_original_order(db_session, make_edition, make_race, interrupt_writes):
    edition = make_edition(year=2025)
    first = make_race(edition, name="Un", slug="un", order_index=1)
    second = make_race(edition, name="Deux", slug="deux", order_index=2)
    third = make_race(edition, name="Trois", slug="trois", order_index=3)
    interrupt_writes()

    with pytest.raises(RuntimeError):
        admin_service.reorder_rows(
            db_session,
            RaceCategory,
            ReorderRequest(ids=[first.id, second.id, third.id], from_index=2, to_index=0),
            scope={"edition_id": edition.id},
        )

    db_session.expire_all()
    order = {r.name: r.order_index for r in db_session.query(RaceCategory).all()}
    assert order == {"Un": 1, "Deux": 2, "Trois": 3}
