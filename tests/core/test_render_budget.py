# tests/core/test_render_budget.py
import pytest

from leversguard.dom.engine import ScanEngine
from leversguard.policy import DEFAULT_POLICY
from leversguard.rules.payload import check_html_size
from leversguard.rules.render_budget import check_dom_depth, check_dom_size
from tests.helpers import codes_of

KB = 1024
MB = 1024 * 1024


@pytest.mark.parametrize("size,expected", [
    (99 * KB, []),
    (120 * KB, ["PERF_HTML_SIZE_LARGE"]),
    (150 * KB, ["PERF_HTML_SIZE_LARGE"]),
    (200 * KB, ["PERF_HTML_SIZE_EXCESSIVE"]),
    (11 * MB, ["WRS_HTML_SIZE_APPROACHING_LIMIT"]),
])
def test_payload_bands(make_doc, size, expected):
    assert codes_of(check_html_size(make_doc("a" * size))) == expected


def test_payload_critical_tier_is_additive(make_doc):
    """Een document van 14.5MB geeft zowel de 10MB waarschuwing als de 14MB fout."""
    findings = check_html_size(make_doc("a" * int(14.5 * MB)))
    assert codes_of(findings) == ["WRS_HTML_SIZE_APPROACHING_LIMIT", "WRS_HTML_SIZE_CRITICAL"]
    assert "15MB" in findings[1][1]


def test_payload_counts_utf8_bytes(make_doc):
    # 'é' is two bytes in UTF-8: 60K characters are ~117KB.
    findings = check_html_size(make_doc("é" * 60_000))
    assert codes_of(findings) == ["PERF_HTML_SIZE_LARGE"]


def test_dom_size_tiers_are_additive(make_doc):
    findings = check_dom_size(make_doc("<p></p>" * 1600))
    assert codes_of(findings) == ["WRS_DOM_SIZE_WARNING", "WRS_DOM_SIZE_EXCEEDED"]
    assert "1600 elements" in findings[0][1]


@pytest.mark.parametrize("count,expected", [
    (800, []),
    (801, ["WRS_DOM_SIZE_WARNING"]),
    (1500, ["WRS_DOM_SIZE_WARNING"]),
    (1501, ["WRS_DOM_SIZE_WARNING", "WRS_DOM_SIZE_EXCEEDED"]),
])
def test_dom_size_thresholds(make_doc, count, expected):
    assert codes_of(check_dom_size(make_doc("<li></li>" * count))) == expected


def test_void_elements_do_not_count(make_doc):
    assert check_dom_size(make_doc("<br>" * 2000 + "<img src=x>" * 2000)) == []


@pytest.mark.parametrize("depth,expected", [
    (25, []),
    (26, ["WRS_DOM_DEPTH_WARNING"]),
    (32, ["WRS_DOM_DEPTH_WARNING"]),
    (33, ["WRS_DOM_DEPTH_WARNING", "WRS_DOM_DEPTH_EXCEEDED"]),
])
def test_dom_depth_thresholds(make_doc, depth, expected):
    text = "<div>" * depth + "</div>" * depth
    assert codes_of(check_dom_depth(make_doc(text))) == expected


def test_depth_resets_between_siblings(make_doc):
    branch = "<div>" * 20 + "</div>" * 20
    assert check_dom_depth(make_doc(branch * 5)) == []


def test_injected_void_set_drives_metrics():
    """Een eigen void-set bepaalt wat als element en diepte meetelt."""
    engine = ScanEngine(void_elements={"li"})
    doc = engine.prepare("<ul>" + "<li>" * 900 + "</ul>", "list.html", DEFAULT_POLICY)
    assert doc.metrics.element_count == 1
    assert doc.metrics.max_depth == 1
    assert check_dom_size(doc) == []
