import dataclasses
import datetime
import decimal
import enum
import typing

import pytest

from ..models import (
    Document,
    Error,
    ErrorSource,
    Link,
    LinksObject,
    Payload,
    Relationship,
    Resource,
    ResourceIdentifier,
)


class Status(enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


@dataclasses.dataclass
class ArticleAttributes:
    title: str
    status: Status = Status.DRAFT
    published_at: typing.Optional[datetime.datetime] = None
    price: typing.Optional[decimal.Decimal] = None


@pytest.fixture
def target():
    from ..renderer import ReprRenderer

    return ReprRenderer


def test_document(target):
    doc = Document(
        links=LinksObject(
            self_=Link(href="https://example.com/articles/1"),
            describedby=Link(href="https://example.com/schemas/article", type="application/schema+json"),
            extensions={"alternate": Link(href="https://example.com/articles/1.atom")},
        ),
        data=Payload.from_json({"type": "articles", "id": "1"}),
        meta={"copyright": "2024"},
        extensions={"@context": "https://example.com/context"},
    )
    result = target()(doc)
    assert result == {
        "data": {"type": "articles", "id": "1"},
        "links": {
            "self": "https://example.com/articles/1",
            "describedby": {
                "href": "https://example.com/schemas/article",
                "type": "application/schema+json",
            },
            "alternate": "https://example.com/articles/1.atom",
        },
        "meta": {"copyright": "2024"},
        "@context": "https://example.com/context",
    }
    assert list(result) == ["data", "links", "meta", "@context"]


def test_null_and_missing_data(target):
    assert target()(Document(data=Payload.from_json(None))) == {"data": None}
    assert target()(Document()) == {}
    assert target()(Relationship(data=Payload.from_json(None))) == {"data": None}


def test_errors(target):
    doc = Document(errors=[Error(status="404", title="Not Found", source=ErrorSource(parameter="id"))])
    assert target()(doc) == {
        "errors": [{"status": "404", "title": "Not Found", "source": {"parameter": "id"}}]
    }


def test_typed_resource(target):
    resource = Resource(
        type="articles",
        id="1",
        attributes=ArticleAttributes(
            title="A",
            status=Status.PUBLISHED,
            published_at=datetime.datetime(2015, 5, 22, 14, 56, 29, tzinfo=datetime.timezone.utc),
            price=decimal.Decimal("1.10"),
        ),
        relationships={
            "author": Relationship(data=ResourceIdentifier(type="people", id="9")),
            "tags": Relationship(data=[ResourceIdentifier(type="tags", id="2")]),
        },
        links={"self": Link(href="https://example.com/articles/1")},
    )
    assert target()(resource) == {
        "type": "articles",
        "id": "1",
        "attributes": {
            "title": "A",
            "status": "published",
            "published_at": "2015-05-22T14:56:29+00:00",
            "price": "1.10",
        },
        "relationships": {
            "author": {"data": {"type": "people", "id": "9"}},
            "tags": {"data": [{"type": "tags", "id": "2"}]},
        },
        "links": {"self": "https://example.com/articles/1"},
    }


def test_decimal_as_number(target):
    assert target(render_decimal_as_str=False)({"price": decimal.Decimal("1.5")}) == {"price": 1.5}


def test_naive_datetime(target):
    value = {"at": datetime.datetime(2020, 1, 1, 9, 0)}
    with pytest.raises(ValueError):
        target()(value)

    tz = datetime.timezone(datetime.timedelta(hours=9))
    assert target(assume_naive_timezone_as=tz)(value) == {"at": "2020-01-01T00:00:00+00:00"}


def test_scalars(target):
    assert target()(
        {
            "date": datetime.date(2020, 1, 2),
            "bytes": b"ab",
            "flag": True,
            "count": 3,
            "ratio": 0.5,
            "none": None,
        }
    ) == {
        "date": "2020-01-02",
        "bytes": "YWI=",
        "flag": True,
        "count": 3,
        "ratio": 0.5,
        "none": None,
    }


def test_unsupported_type(target):
    with pytest.raises(TypeError) as e:
        target()({"meta": {"value": object()}})
    assert str(e.value).startswith("/meta/value: unsupported type")


def test_typed_attributes_keep_null(target):
    @dataclasses.dataclass
    class Attributes:
        title: typing.Optional[str]
        subtitle: typing.Optional[str] = None

    resource = Resource[Attributes, typing.Dict[str, Relationship]](
        type="articles", id="1", attributes=Attributes(title=None)
    )
    assert target()(resource) == {
        "type": "articles",
        "id": "1",
        "attributes": {"title": None, "subtitle": None},
    }
    assert target()({"title": None}) == {"title": None}
