# src/leversguard/rules/images.py
import re
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.dom.tokenizer import TagToken
from leversguard.model import Severity

LCP_HINT_RE = re.compile(r"(hero|banner|masthead)", re.IGNORECASE)


@rule_spec(codes=["SEO_IMG_ALT_MISSING", "PERF_IMG_DIMENSIONS_MISSING", "PERF_IMG_LOADING_MISSING"])
def check_img_tags(doc: ScanDocument) -> List[Finding]:
    """Each plain <img> is checked for alt, explicit dimensions and a loading hint."""
    res = []
    for img in doc.tags("img"):
        if not img.has_attr("alt"):
            res.append((
                "SEO_IMG_ALT_MISSING",
                "Image missing alt attribute. Add a meaningful `alt` for accessibility and SEO.",
                Severity.WARNING, img.start, img.end
            ))
        if not (img.has_attr("width") and img.has_attr("height")):
            res.append((
                "PERF_IMG_DIMENSIONS_MISSING",
                "Image missing width/height attributes. Explicit dimensions prevent layout shift.",
                Severity.WARNING, img.start, img.end
            ))
        if not img.has_attr("loading"):
            res.append((
                "PERF_IMG_LOADING_MISSING",
                'Consider adding loading="lazy" to defer off-screen images.',
                Severity.INFO, img.start, img.end
            ))
    return res


def _priority_set(tag: TagToken) -> bool:
    # <Image priority> and priority={true} count, priority={false} does not.
    return tag.has_attr("priority") and tag.attr("priority").strip().lower() != "false"


@rule_spec(codes=["PERF_NEXTIMG_SIZES_MISSING", "PERF_NEXTIMG_PRIORITY_MISSING"])
def check_image_components(doc: ScanDocument) -> List[Finding]:
    """
    Framework image components (next/image style <Image>).
    Names are matched case-sensitively so SVG <image> is left alone.
    """
    res = []
    components = [t for name in doc.policy.image_components for t in doc.tags(name, case_sensitive=True)]
    for image in sorted(components, key=lambda t: t.start):
        if not image.has_attr("sizes"):
            res.append((
                "PERF_NEXTIMG_SIZES_MISSING",
                "next/image missing `sizes` attribute. Without it, the browser may fetch incorrect resolutions.",
                Severity.WARNING, image.start, image.end
            ))

        # Likely LCP: hero/banner/masthead in the src.
        if LCP_HINT_RE.search(image.attr("src")) and not _priority_set(image):
            res.append((
                "PERF_NEXTIMG_PRIORITY_MISSING",
                f"Likely LCP image missing `priority`. Add `priority` to improve initial load "
                f"and keep it under {doc.policy.lcp_image_kb}KB.",
                Severity.INFO, image.start, image.end
            ))
    return res


DEFINITION = RuleSetDefinition(name="images", order=90, rules=[check_img_tags, check_image_components])
