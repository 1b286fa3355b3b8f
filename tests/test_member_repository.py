"""Tests for the member repository queries."""

import pytest

from choir_registry.domain.errors import ValidationError
from choir_registry.infrastructure.repositories import MemberRepository


def _values(**overrides):
    values = {
        "full_name": "Emeka Nwosu",
        "phone_no": "08031112222",
        "parish": "Holy Trinity",
        "zone": "Abuja Central",
        "area": "Garki",
        "position": [],
        "instruments": [],
    }
    values.update(overrides)
    return values


@pytest.fixture()
def repository(db_session) -> MemberRepository:
    return MemberRepository(db_session)


def test_create_assigns_identifier_and_timestamp(repository):
    member = repository.create(_values(position=["Usher"]), photo="")

    assert len(member.id) == 32
    assert member.created_at is not None
    assert member.updated_at is None
    assert repository.get(member.id) == member


def test_create_requires_normalized_arrays(repository):
    with pytest.raises(ValidationError):
        repository.create(_values(position="Usher"))
    with pytest.raises(ValidationError):
        repository.create(_values(instruments=[1, 2]))


def test_update_is_partial(repository):
    member = repository.create(_values(position=["Usher"]))

    updated = repository.update(member.id, {"area": "Wuse"})

    assert updated.area == "Wuse"
    assert updated.full_name == "Emeka Nwosu"
    assert updated.position == ["Usher"]
    assert updated.created_at == member.created_at


def test_update_and_delete_missing_member(repository):
    assert repository.update("missing", {"area": "Wuse"}) is None
    assert repository.delete("missing") is False


def test_delete_reports_existence(repository):
    member = repository.create(_values())

    assert repository.delete(member.id) is True
    assert repository.get(member.id) is None


def test_list_paginates_and_counts(repository):
    for index in range(25):
        repository.create(_values(full_name=f"Member {index:02d}"))

    first_page, total = repository.list(skip=0, limit=10)
    last_page, _ = repository.list(skip=20, limit=10)

    assert total == 25
    assert len(first_page) == 10
    assert len(last_page) == 5


def test_list_all_is_sorted_by_name(repository):
    for name in ("Zainab", "Adaeze", "Musa"):
        repository.create(_values(full_name=name))

    assert [member.full_name for member in repository.list_all()] == [
        "Adaeze",
        "Musa",
        "Zainab",
    ]


def test_search_matches_parish_only_records(repository):
    member = repository.create(
        _values(full_name="Tobi", phone_no="0700", parish="St. Monica", zone="Ikeja", area="Ojodu")
    )
    repository.create(_values())

    results = repository.search("monica")

    assert [found.id for found in results] == [member.id]


@pytest.mark.parametrize("term", ["EMEKA", "0803111", "trinity", "abuja", "GARKI"])
def test_search_covers_every_searchable_field(repository, term):
    member = repository.create(_values())

    assert [found.id for found in repository.search(term)] == [member.id]


def test_search_treats_wildcards_literally(repository):
    repository.create(_values(full_name="Emeka"))

    assert repository.search("%") == []
    assert repository.search("_") == []


def test_search_limit(repository):
    for index in range(5):
        repository.create(_values(full_name=f"Grace {index}"))

    assert len(repository.search("grace", limit=3)) == 3
    assert len(repository.search("grace")) == 5


def test_distinct_values_skip_blank_entries(repository):
    repository.create(_values(zone="Lagos"))
    repository.create(_values(zone="Abuja"))
    repository.create(_values(zone="Lagos"))
    repository.create(_values(zone=None))
    repository.create(_values(zone="   "))

    assert repository.distinct_values("zone") == ["Abuja", "Lagos"]


def test_distinct_values_rejects_unknown_fields(repository):
    with pytest.raises(ValidationError):
        repository.distinct_values("photo")


def test_referenced_photos(repository):
    repository.create(_values(), photo="1-aaaa.png")
    repository.create(_values(), photo="")

    assert repository.referenced_photos() == {"1-aaaa.png"}
