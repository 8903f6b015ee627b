"""Step definitions for conversion BDD tests."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from singer_metrics.core.encoding.line_protocol import LineProtocol
from singer_metrics.core.errors import ParseError
from singer_metrics.core.models import LineProtocolConfig, Precision, Tags
from singer_metrics.core.parser import parse_line


@dataclass
class ConversionContext:
    """State shared between the steps of one scenario."""

    precision: Precision = Precision.NANOSECONDS
    extra_tags: Tags = field(default_factory=dict)
    output: str | None = None
    error: ParseError | None = None


@pytest.fixture
def ctx() -> ConversionContext:
    """Fresh scenario context for each test."""
    return ConversionContext()


@given(parsers.parse('the precision "{token}"'))
def given_precision(ctx: ConversionContext, token: str) -> None:
    ctx.precision = Precision.from_string(token)


@given(parsers.parse('the extra tag "{key}" is "{value}"'))
def given_extra_tag(ctx: ConversionContext, key: str, value: str) -> None:
    ctx.extra_tags[key] = value


@when("I convert the line:")
def when_convert(ctx: ConversionContext, docstring: str) -> None:
    protocol = LineProtocol(LineProtocolConfig(ctx.precision, ctx.extra_tags))
    try:
        ctx.output = protocol.dump(parse_line(docstring))
    except ParseError as e:
        ctx.error = e


@then(parsers.parse('the output is "{expected}"'))
def then_output(ctx: ConversionContext, expected: str) -> None:
    assert ctx.error is None
    assert ctx.output == expected


@then(parsers.parse('the conversion fails with "{error_name}"'))
def then_fails(ctx: ConversionContext, error_name: str) -> None:
    assert ctx.output is None
    assert type(ctx.error).__name__ == error_name
