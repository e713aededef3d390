"""Resource Kinds — descriptors for the four study-content categories.

Invariants:
    - Exactly four kinds: papers, experiments, algorithms, course-notes
    - Each kind owns one backing file named <slug>.json
    - title (1-200) and tags (optional, each 1-50) are common to every kind
    - Field order in a descriptor is the key order of stored records

Design Decisions:
    - One frozen descriptor per kind drives schemas, routes and storage alike
"""

from dataclasses import dataclass


TAG_MIN_LENGTH = 1
TAG_MAX_LENGTH = 50


@dataclass(frozen=True)
class FieldSpec:
    """One kind-specific text field and its length bounds."""
    name: str
    required: bool = True
    min_length: int | None = 1
    max_length: int | None = None


@dataclass(frozen=True)
class ResourceKind:
    """Everything the generic CRUD layer needs to know about one category."""
    slug: str
    label: str
    category: str
    fields: tuple[FieldSpec, ...]

    @property
    def filename(self) -> str:
        return f"{self.slug}.json"

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


_TITLE = FieldSpec("title", max_length=200)


PAPERS = ResourceKind(
    slug="papers",
    label="Paper",
    category="Paper Review",
    fields=(
        _TITLE,
        FieldSpec("authors", max_length=500),
        FieldSpec("summary", max_length=1000),
        FieldSpec("content"),
    ),
)

EXPERIMENTS = ResourceKind(
    slug="experiments",
    label="Experiment",
    category="Experiment Result",
    fields=(
        _TITLE,
        FieldSpec("description"),
        FieldSpec("methodology"),
        FieldSpec("results"),
        FieldSpec("conclusion"),
    ),
)

ALGORITHMS = ResourceKind(
    slug="algorithms",
    label="Algorithm",
    category="Algorithm Study",
    fields=(
        _TITLE,
        FieldSpec("problem"),
        FieldSpec("solution"),
        FieldSpec("complexity", required=False, min_length=None, max_length=200),
        FieldSpec("code", required=False, min_length=None),
    ),
)

COURSE_NOTES = ResourceKind(
    slug="course-notes",
    label="Course note",
    category="Course Note",
    fields=(
        _TITLE,
        FieldSpec("course", max_length=100),
        FieldSpec("week", required=False, min_length=None, max_length=50),
        FieldSpec("topic", max_length=200),
        FieldSpec("content"),
    ),
)

RESOURCE_KINDS: tuple[ResourceKind, ...] = (
    PAPERS, EXPERIMENTS, ALGORITHMS, COURSE_NOTES,
)


def get_resource_kind(slug: str) -> ResourceKind:
    """Look up a descriptor by its URL slug. Raises KeyError for unknown slugs."""
    for kind in RESOURCE_KINDS:
        if kind.slug == slug:
            return kind
    raise KeyError(slug)
