import logging

import pytest

from paint_estimator.config import CoverageDefaults
from paint_estimator.models import CoverageEntry, MaterialCategory
from paint_estimator.resolvers.coverage import (
    CoverageResolver,
    coat_label,
    normalize_product_name,
)
from paint_estimator.utils.errors import MissingCoverageData


def test_normalize_strips_pack_tokens():
    assert normalize_product_name("AP Ace Emulsion (20 L)") == "ap ace emulsion"
    assert normalize_product_name("AP TruCare Wall Putty 20kg") == "ap trucare wall putty"
    assert normalize_product_name("  AP  Royale   Shyne 10 ltr ") == "ap royale shyne"


def test_coat_labels():
    assert coat_label(1) == "1 coat"
    assert coat_label(3) == "3 coats"


def test_exact_lookup_uses_coat_specific_rate(coverage_entries):
    resolver = CoverageResolver(coverage_entries)

    assert resolver.lookup("AP TruCare Wall Putty 20kg", 2, MaterialCategory.PUTTY) == (10.0, False)
    assert resolver.lookup("AP TruCare Wall Putty", 1, MaterialCategory.PUTTY) == (20.0, False)


def test_alternate_label_formats():
    resolver = CoverageResolver([
        CoverageEntry("AP Ace Emulsion", "2 Coat", 55.0),
        CoverageEntry("AP Apex Emulsion", "1", 65.0),
    ])

    assert resolver.resolve("AP Ace Emulsion", 2, MaterialCategory.EMULSION) == 55.0
    assert resolver.resolve("AP Apex Emulsion", 1, MaterialCategory.EMULSION) == 65.0


def test_base_coat_qualifier_is_stripped_for_primers():
    resolver = CoverageResolver([CoverageEntry("AP Apex Ultima Protek", "1 coat", 90.0)])

    assert resolver.resolve("AP Apex Ultima Protek Base Coat", 1, MaterialCategory.PRIMER) == 90.0
    # topcoat lookups keep the base coat qualifier, so this one falls back
    assert resolver.lookup("AP Apex Ultima Protek Base Coat", 1, MaterialCategory.EMULSION) == (120.0, True)


@pytest.mark.parametrize("category, expected", [
    (MaterialCategory.PUTTY, 10.0),
    (MaterialCategory.PRIMER, 100.0),
    (MaterialCategory.ENAMEL_PRIMER, 100.0),
    (MaterialCategory.EMULSION, 120.0),
    (MaterialCategory.ENAMEL_TOPCOAT, 120.0),
    (None, 120.0),
])
def test_category_defaults(category, expected):
    resolver = CoverageResolver([])

    assert resolver.lookup("Unknown Product", 2, category) == (expected, True)


def test_defaults_come_from_settings():
    resolver = CoverageResolver([], CoverageDefaults(putty=12, primer=90, other=110))

    assert resolver.resolve("x", 1, MaterialCategory.PUTTY) == 12
    assert resolver.resolve("x", 1, MaterialCategory.PRIMER) == 90
    assert resolver.resolve("x", 1, MaterialCategory.EMULSION) == 110


def test_fallback_is_logged(caplog):
    resolver = CoverageResolver([])
    with caplog.at_level(logging.WARNING):
        resolver.resolve("Mystery Primer", 1, MaterialCategory.PRIMER)

    assert "Coverage missing for 'Mystery Primer'" in caplog.text


def test_zero_coverage_row_falls_back():
    resolver = CoverageResolver([CoverageEntry("AP Ace Emulsion", "2 coats", 0.0)])

    assert resolver.lookup("AP Ace Emulsion", 2, MaterialCategory.EMULSION) == (120.0, True)


def test_strict_lookup_raises():
    with pytest.raises(MissingCoverageData):
        CoverageResolver([]).lookup("Unknown", 1, MaterialCategory.PRIMER, strict=True)
