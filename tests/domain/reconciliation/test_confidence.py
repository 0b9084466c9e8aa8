from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from regrecon.domain.model import Confidence, SourceTag
from regrecon.domain.reconciliation import classify, cross_validate, outranks, precedence

if TYPE_CHECKING:
    from collections.abc import Callable

    from regrecon.domain.model import CompanyRecord


@pytest.mark.parametrize(
    ("source", "confidence"),
    [
        (SourceTag.AUTHORITATIVE, Confidence.HIGH),
        (SourceTag.CROSS_VALIDATED, Confidence.HIGH),
        (SourceTag.PRELIMINARY, Confidence.MEDIUM),
    ],
)
def test_confidence_is_derived_from_source(
    make_record: Callable[..., CompanyRecord],
    source: SourceTag,
    confidence: Confidence,
) -> None:
    company = classify(make_record("111"), source)

    assert company.confidence is confidence
    assert company.validation_note


def test_cross_validation_upgrades_confirmed_preliminary_records(
    make_record: Callable[..., CompanyRecord],
) -> None:
    confirmed = classify(make_record("111"), SourceTag.PRELIMINARY)
    unconfirmed = classify(make_record("222"), SourceTag.PRELIMINARY)

    result = cross_validate([confirmed, unconfirmed], {"111", "999"})

    assert result[0].source is SourceTag.CROSS_VALIDATED
    assert result[0].confidence is Confidence.HIGH
    assert result[0].validation_note == "Cross-validated against the federal registry"
    assert result[1] is unconfirmed


def test_cross_validation_never_touches_authoritative_entries(
    make_record: Callable[..., CompanyRecord],
) -> None:
    authoritative = classify(make_record("111"), SourceTag.AUTHORITATIVE)

    assert cross_validate([authoritative], {"111"}) == [authoritative]


def test_cross_validation_never_lowers_confidence(
    make_record: Callable[..., CompanyRecord],
) -> None:
    companies = [
        classify(make_record(tax_id), source)
        for tax_id in ("111", "222")
        for source in SourceTag
    ]

    result = cross_validate(companies, {"111"})

    for before, after in zip(companies, result, strict=True):
        assert precedence(after)[0] >= precedence(before)[0]


def test_outranks_orders_by_confidence_then_source(
    make_record: Callable[..., CompanyRecord],
) -> None:
    record = make_record("111")
    authoritative = classify(record, SourceTag.AUTHORITATIVE)
    cross_validated = classify(record, SourceTag.CROSS_VALIDATED)
    preliminary = classify(record, SourceTag.PRELIMINARY)

    assert outranks(authoritative, cross_validated)
    assert outranks(cross_validated, preliminary)
    assert not outranks(preliminary, authoritative)
    assert not outranks(authoritative, authoritative)
