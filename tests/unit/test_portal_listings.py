"""Listing scenarios for the portal's users, spaces, institutions and recordings."""

import pytest

from portal_search.domain import EntityWiringError
from portal_search.entities import INSTITUTIONS, RECORDINGS, SPACES, USERS
from tests.fixtures.records import days_ago


USERS_DATA = [
    {
        "id": 1,
        "full_name": "El Magron",
        "username": "el-magron",
        "email": "magron@here.com",
        "approved": True,
        "login_method_local": True,
        "institution_id": 1,
        "institution_permalink": "inst-a",
    },
    {
        "id": 2,
        "full_name": "Rebecca Reed",
        "username": "rreed",
        "email": "rebecca@there.org",
        "approved": True,
        "superuser": True,
        "login_method_shib": True,
        "institution_id": 1,
        "institution_permalink": "inst-a",
    },
    {
        "id": 3,
        "full_name": "Alice Doe",
        "username": "alice",
        "email": "alice@nowhat.net",
        "approved": False,
        "can_record": True,
        "institution_id": 2,
        "institution_permalink": "inst-b",
    },
    {
        "id": 4,
        "full_name": "Bob Ray",
        "username": "bobby",
        "email": "bob@place.com",
        "approved": True,
        "disabled": True,
        "login_method_ldap": True,
        "institution_id": 1,
        "institution_permalink": "inst-a",
    },
    {
        "id": 5,
        "full_name": "Elena Smith",
        "username": "esmith",
        "email": "es@x.io",
        "approved": True,
        "institutional_admin": True,
        "institution_id": 2,
        "institution_permalink": "inst-b",
    },
]

SPACES_DATA = [
    {"id": 1, "name": "First space created", "tags": ["one tag"], "approved": True, "institution_id": 1},
    {
        "id": 2,
        "name": "Second space created",
        "tags": ["one tag", "tag", "extra tag"],
        "approved": True,
        "institution_id": 1,
    },
    {"id": 3, "name": "A space starting with letter A", "approved": False, "institution_id": 2},
    {
        "id": 4,
        "name": "Being one starting with B",
        "tags": ["extra tag"],
        "approved": True,
        "disabled": True,
        "institution_id": 1,
    },
    {"id": 5, "name": "Ena's space", "approved": True, "institution_id": 2},
    {"id": 6, "name": "Enabled space", "approved": True, "disabled": True, "institution_id": 1},
]

INSTITUTIONS_DATA = [
    {"id": 1, "name": "Black Sabbath", "acronym": "BS"},
    {"id": 2, "name": "ABBA", "acronym": "AB"},
    {"id": 3, "name": "Alices and Bobs", "acronym": "A&Bs"},
    {"id": 4, "name": "National Security Agency", "acronym": "NSA"},
    {"id": 5, "name": "Nat Geo", "acronym": "NG"},
]

RECORDINGS_DATA = [
    {
        "id": 1,
        "name": "First record",
        "description": "records for first",
        "recordid": "rec-1",
        "room_name": "room one",
        "start_time": days_ago(3),
        "published": True,
        "available": True,
        "has_playback": True,
        "institution_id": 1,
    },
    {
        "id": 2,
        "name": "Second records",
        "description": "",
        "recordid": "rec-2",
        "room_name": "records room",
        "start_time": days_ago(1),
        "published": False,
        "available": True,
        "has_playback": True,
        "institution_id": 1,
    },
    {
        "id": 3,
        "name": "Third",
        "description": "second take",
        "recordid": "rec-3",
        "room_name": "other",
        "start_time": days_ago(2),
        "published": True,
        "available": False,
        "institution_id": 2,
    },
]


@pytest.fixture
def portal(service, source):
    source.extend(USERS, USERS_DATA)
    source.extend(SPACES, SPACES_DATA)
    source.extend(INSTITUTIONS, INSTITUTIONS_DATA)
    source.extend(RECORDINGS, RECORDINGS_DATA)
    return service


class TestUsersListing:
    def test_ordered_by_full_name(self, portal):
        assert portal.search(USERS).ids == [3, 4, 1, 5, 2]

    def test_admin_filter_reads_superuser(self, portal):
        assert portal.search(USERS, filters={"admin": "true"}).ids == [2]

    def test_approved_false(self, portal):
        assert portal.search(USERS, filters={"approved": "false"}).ids == [3]

    def test_disabled_false_includes_unset(self, portal):
        assert portal.search(USERS, filters={"disabled": "false"}).ids == [3, 1, 5, 2]

    def test_disabled_true(self, portal):
        assert portal.search(USERS, filters={"disabled": "true"}).ids == [4]

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("can_record", [3]),
            ("institutional_admin", [5]),
            ("login_method_shib", [2]),
            ("login_method_ldap", [4]),
            ("login_method_local", [1]),
        ],
    )
    def test_boolean_filters(self, portal, name, expected):
        assert portal.search(USERS, filters={name: True}).ids == expected

    def test_institutions_filter(self, portal):
        assert portal.search(USERS, filters={"institutions": "inst-a"}).ids == [4, 1, 2]
        assert portal.search(USERS, filters={"institutions": "inst-a,inst-b"}).total == 5

    def test_institution_admin_never_sees_disabled(self, portal):
        assert portal.search(USERS, tenant_id=1).ids == [1, 2]
        assert portal.search(USERS, tenant_id=1, filters={"disabled": "true"}).total == 0

    def test_mixed_query_and_filter(self, portal):
        page = portal.search(USERS, query="el re", filters={"approved": "true"})

        assert page.ids == [1, 2, 5]
        assert [item.score for item in page.items] == [3, 3, 1]

    def test_query_matches_email(self, portal):
        assert portal.search(USERS, query="THERE.ORG").ids == [2]


class TestSpacesListing:
    def test_ranked_by_relevance_then_name(self, portal):
        page = portal.search(SPACES, query="second space")

        assert page.ids == [2, 3, 5, 6, 1]
        assert page.items[0].score == 2

    def test_all_terms_override(self, portal):
        assert portal.search(SPACES, query="second space", term_mode="all").ids == [2]

    def test_every_tag_is_required(self, portal):
        assert portal.search(SPACES, filters={"tag": "extra tag, one tag"}).ids == [2]
        assert portal.search(SPACES, filters={"tag": "extra tag"}).ids == [4, 2]

    def test_mixed_filters_and_query(self, portal):
        page = portal.search(SPACES, query="Ena", filters={"approved": "true", "disabled": "false"})
        assert page.ids == [5]

    def test_institution_scope_hides_disabled(self, portal):
        assert portal.search(SPACES, tenant_id=1).ids == [1, 2]

    def test_unscoped_listing_shows_disabled(self, portal):
        assert portal.search(SPACES, filters={"disabled": True}).ids == [4, 6]


class TestInstitutionsListing:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("ABBA", [2, 1]),
            ("Nat", [5, 4]),
            ("NSA", [4]),
            ("Black Sabbath", [1]),
        ],
    )
    def test_lookup_by_name_or_acronym(self, portal, query, expected):
        assert portal.search(INSTITUTIONS, query=query).ids == expected

    def test_acronym_and_name_matches_rank_first(self, portal):
        page = portal.search(INSTITUTIONS, query="BS")

        assert page.ids == [3, 1]
        assert [item.score for item in page.items] == [2, 1]

    def test_alphabetical_without_query(self, portal):
        assert portal.search(INSTITUTIONS).ids == [2, 3, 1, 5, 4]

    def test_tenant_scope_is_a_wiring_error(self, portal):
        with pytest.raises(EntityWiringError):
            portal.search(INSTITUTIONS, tenant_id=1)


class TestRecordingsListing:
    def test_most_recent_first(self, portal):
        assert portal.search(RECORDINGS).ids == [2, 3, 1]

    def test_relevance_then_recency(self, portal):
        page = portal.search(RECORDINGS, query="second records")

        assert page.ids == [2, 3, 1]
        assert [item.score for item in page.items] == [3, 1, 1]

    def test_record_id_is_searchable(self, portal):
        assert portal.search(RECORDINGS, query="rec-3").ids == [3]

    @pytest.mark.parametrize(
        ("filters", "expected"),
        [
            ({"published": "true"}, [3, 1]),
            ({"published": "false"}, [2]),
            ({"available": "false"}, [3]),
            ({"playback": "true"}, [2, 1]),
            ({"playback": "false"}, [3]),
        ],
    )
    def test_filters(self, portal, filters, expected):
        assert portal.search(RECORDINGS, filters=filters).ids == expected

    def test_tenant_scope(self, portal):
        assert portal.search(RECORDINGS, tenant_id=1).ids == [2, 1]
        assert portal.search(RECORDINGS, tenant_id="2").ids == [3]
