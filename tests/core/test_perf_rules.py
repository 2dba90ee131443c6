# tests/core/test_perf_rules.py
from leversguard.policy import resolve_policy
from leversguard.rules.fonts import check_font_display, check_font_preloads
from leversguard.rules.images import check_image_components, check_img_tags
from leversguard.rules.resource_hints import check_preconnect, external_origins
from leversguard.rules.scripts import check_blocking_scripts, check_script_budget
from tests.helpers import codes_of


# --- <img> ---

def test_bare_img_gets_three_findings(make_doc):
    text = '<body><img src="/logo.png"></body>'
    findings = check_img_tags(make_doc(text))

    assert codes_of(findings) == ["SEO_IMG_ALT_MISSING", "PERF_IMG_DIMENSIONS_MISSING", "PERF_IMG_LOADING_MISSING"]
    for _, _, _, start, end in findings:
        assert text[start:end] == '<img src="/logo.png">'


def test_complete_img_is_clean(make_doc):
    text = '<img src="/f.png" alt="Footer" width="800" height="200" loading="lazy"/>'
    assert check_img_tags(make_doc(text)) == []


def test_img_with_only_width(make_doc):
    findings = check_img_tags(make_doc('<img src="a" alt="" width="10" loading="eager">'))
    assert codes_of(findings) == ["PERF_IMG_DIMENSIONS_MISSING"]


def test_each_img_is_checked(make_doc):
    text = '<img src="a" alt="a" width=1 height=1><IMG SRC="b">'
    findings = check_img_tags(make_doc(text))
    assert codes_of(findings).count("PERF_IMG_LOADING_MISSING") == 2
    assert codes_of(findings).count("SEO_IMG_ALT_MISSING") == 1


# --- <Image> component ---

def test_image_component_missing_sizes_and_priority(make_doc):
    text = '<Image\n  src="/hero.jpg"\n  alt="Hero"\n  width={1200}\n  height={630}\n/>'
    findings = check_image_components(make_doc(text, file_name="page.tsx"))
    assert codes_of(findings) == ["PERF_NEXTIMG_SIZES_MISSING", "PERF_NEXTIMG_PRIORITY_MISSING"]
    assert "200KB" in findings[1][1]


def test_image_component_with_priority_and_sizes(make_doc):
    text = '<Image src="/hero2.jpg" alt="Hero" sizes="(max-width: 768px) 100vw, 1200px" priority />'
    assert check_image_components(make_doc(text, file_name="page.tsx")) == []


def test_image_component_not_lcp(make_doc):
    text = '<Image src="/thumb.jpg" alt="t" width={10} height={10} sizes="10px" />'
    assert check_image_components(make_doc(text)) == []


def test_priority_false_on_plain_image_is_quiet(make_doc):
    """priority={false} maakt een gewone afbeelding geen LCP kandidaat."""
    text = '<Image src="/thumb.jpg" sizes="10px" priority={false} />'
    assert check_image_components(make_doc(text, file_name="card.tsx")) == []


def test_priority_false_on_hero_still_fires(make_doc):
    text = '<Image src="/hero.jpg" sizes="100vw" priority={false} />'
    assert codes_of(check_image_components(make_doc(text))) == ["PERF_NEXTIMG_PRIORITY_MISSING"]


def test_svg_image_is_not_a_component(make_doc):
    assert check_image_components(make_doc('<svg><image href="hero.svg"/></svg>')) == []


def test_image_components_are_configurable(make_doc):
    policy = resolve_policy({"frameworks": {"imageComponents": ["NuxtImg"]}})
    text = '<NuxtImg src="/banner.png" /><Image src="/banner.png" />'
    findings = check_image_components(make_doc(text, policy=policy))
    assert codes_of(findings) == ["PERF_NEXTIMG_SIZES_MISSING", "PERF_NEXTIMG_PRIORITY_MISSING"]
    assert findings[0][3] == 0


# --- Fonts ---

FONT_FACE = "@font-face { font-family: Inter; src: url(/inter.woff2); }"


def test_font_face_without_swap(make_doc):
    text = f"<style>{FONT_FACE}</style>"
    (code, _, _, start, end), = check_font_display(make_doc(text))
    assert code == "PERF_FONT_DISPLAY_MISSING"
    assert text[start:end] == FONT_FACE


def test_font_face_with_swap(make_doc):
    text = "@font-face {\n  font-family: Inter;\n  font-display: swap;\n}"
    assert check_font_display(make_doc(text, file_name="styles.ts")) == []


def test_font_display_check_follows_policy(make_doc):
    policy = resolve_policy({"perf": {"requireFontDisplaySwap": False}})
    assert check_font_display(make_doc(FONT_FACE, policy=policy)) == []


def test_font_preload_excess(make_doc):
    link = '<link rel="preload" href="/f{}.woff2" as="font" crossorigin>'
    four = "".join(link.format(i) for i in range(4))
    five = "".join(link.format(i) for i in range(5))

    assert check_font_preloads(make_doc(four)) == []
    (code, message, *_), = check_font_preloads(make_doc(five))
    assert code == "PERF_FONT_PRELOAD_EXCESS"
    assert "(5)" in message


# --- Scripts ---

def test_blocking_script(make_doc):
    text = '<script src="https://cdn.example.com/analytics.js"></script>'
    (code, _, _, start, end), = check_blocking_scripts(make_doc(text))
    assert code == "PERF_SCRIPT_BLOCKING"
    assert text[start:end] == '<script src="https://cdn.example.com/analytics.js">'


def test_async_and_defer_scripts_do_not_block(make_doc):
    text = '<script async src="a.js"></script><script src="b.js" defer></script><script>inline()</script>'
    assert check_blocking_scripts(make_doc(text)) == []


def test_async_in_file_name_is_not_an_attribute(make_doc):
    text = '<script src="/async-loader.js"></script>'
    assert codes_of(check_blocking_scripts(make_doc(text))) == ["PERF_SCRIPT_BLOCKING"]


def test_script_budget(make_doc):
    six = "".join(f'<script defer src="/s{i}.js"></script>' for i in range(6))
    seven = six + '<script defer src="/s7.js"></script>'

    assert check_script_budget(make_doc(six)) == []
    (code, message, *_), = check_script_budget(make_doc(seven))
    assert code == "PERF_SCRIPT_COUNT_EXCEEDED"
    assert "7 script tags" in message and "Budget is 6" in message


def test_script_budget_from_policy(make_doc):
    policy = resolve_policy({"perf": {"maxThirdPartyScriptsPerPage": 1}})
    text = '<script defer src="/a.js"></script><script defer src="/b.js"></script>'
    assert codes_of(check_script_budget(make_doc(text, policy=policy))) == ["PERF_SCRIPT_COUNT_EXCEEDED"]


# --- Resource hints ---

def test_external_origins_are_distinct_and_ordered(make_doc):
    text = (
        '<script src="https://cdn.a.com/x.js"></script>'
        '<script src="https://cdn.a.com/y.js"></script>'
        '<script src="/local.js"></script>'
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css?family=Inter">'
    )
    assert external_origins(make_doc(text)) == ["https://cdn.a.com", "https://fonts.googleapis.com"]


def test_preconnect_missing_lists_three_origins(make_doc):
    text = "".join(f'<script defer src="https://cdn{i}.example.com/x.js"></script>' for i in range(4))
    (code, message, *_), = check_preconnect(make_doc(text))
    assert code == "PERF_PRECONNECT_MISSING"
    assert "https://cdn2.example.com" in message
    assert "https://cdn3.example.com" not in message


def test_preconnect_present(make_doc):
    text = (
        '<link rel="preconnect" href="https://cdn.a.com">'
        '<script defer src="https://cdn.a.com/x.js"></script>'
    )
    assert check_preconnect(make_doc(text)) == []


def test_no_external_origins_no_hint(make_doc):
    assert check_preconnect(make_doc('<script src="/a.js"></script><link rel="stylesheet" href="a.css">')) == []


def test_malformed_url_is_ignored(make_doc):
    assert check_preconnect(make_doc('<script src="http://[::1"></script>')) == []
