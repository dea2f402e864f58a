"""Entity declarations for the admin portal listings.

Each function returns a SearchableEntity wiring one listing into the generic
engine. Attribute names are the keys the storage layer puts in each
Candidate's values; boolean attributes the storage layer leaves out count as
false for tri-state filters.

All four listings declare ``TermMode.ANY``: a record matching any query term
is listed, ranked by how many (term, field) pairs it matches, so "second
space" lists every space and ranks "Second space created" first. Entities
without a declared mode use the stricter ``PORTAL_SEARCH_DEFAULT_TERM_MODE``
(``all``). See DESIGN.md, "Term mode".
"""

from portal_search.domain.model import TermMode
from portal_search.search.schema import (
    MembershipFilter,
    SearchableEntity,
    SearchField,
    SortField,
    TagFilter,
    TriStateFilter,
)


USERS = "users"
SPACES = "spaces"
INSTITUTIONS = "institutions"
RECORDINGS = "recordings"


def users_entity() -> SearchableEntity:
    """Admin user listing: name/username/email, ordered by full name.

    Institution admins never see disabled users.
    """
    return SearchableEntity(
        name=USERS,
        fields=[
            SearchField("full_name"),
            SearchField("username"),
            SearchField("email"),
        ],
        filters=[
            TriStateFilter("admin", attribute="superuser"),
            TriStateFilter("approved"),
            TriStateFilter("disabled"),
            TriStateFilter("can_record"),
            TriStateFilter("institutional_admin"),
            TriStateFilter("login_method_shib"),
            TriStateFilter("login_method_ldap"),
            TriStateFilter("login_method_local"),
            MembershipFilter("institutions", attribute="institution_permalink"),
        ],
        tenant_attribute="institution_id",
        sort=[SortField("full_name")],
        term_mode=TermMode.ANY,
        scoped_filters={"disabled": False},
    )


def spaces_entity() -> SearchableEntity:
    """Admin space listing: name search plus tag filter, ordered by name."""
    return SearchableEntity(
        name=SPACES,
        fields=[SearchField("name")],
        filters=[
            TriStateFilter("approved"),
            TriStateFilter("disabled"),
            TagFilter("tag", attribute="tags"),
        ],
        tenant_attribute="institution_id",
        sort=[SortField("name")],
        term_mode=TermMode.ANY,
        scoped_filters={"disabled": False},
    )


def institutions_entity() -> SearchableEntity:
    """Institution lookup by name or acronym, alphabetical."""
    return SearchableEntity(
        name=INSTITUTIONS,
        fields=[SearchField("name"), SearchField("acronym")],
        sort=[SortField("name")],
        term_mode=TermMode.ANY,
    )


def recordings_entity() -> SearchableEntity:
    # tenant is the institution owning the recording's room (user or space)
    return SearchableEntity(
        name=RECORDINGS,
        fields=[
            SearchField("name"),
            SearchField("description"),
            SearchField("recordid"),
            SearchField("room_name"),
        ],
        filters=[
            TriStateFilter("published"),
            TriStateFilter("available"),
            TriStateFilter("playback", attribute="has_playback"),
        ],
        tenant_attribute="institution_id",
        sort=[SortField("start_time", descending=True)],
        term_mode=TermMode.ANY,
    )


def portal_entities() -> list[SearchableEntity]:
    return [users_entity(), spaces_entity(), institutions_entity(), recordings_entity()]
