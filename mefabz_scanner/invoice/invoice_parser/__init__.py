"""Composable OCR invoice parser components."""

from .affix_matcher import AffixMatcher, build_suffix_pattern
from .fields_parser import detect_brand, extract_page_number
from .lines import filter_footer_band, filter_product_band, normalize_lines
from .products_parser import clean_product_candidate, extract_product_candidates

__all__ = [
    "AffixMatcher",
    "build_suffix_pattern",
    "clean_product_candidate",
    "detect_brand",
    "extract_page_number",
    "extract_product_candidates",
    "filter_footer_band",
    "filter_product_band",
    "normalize_lines",
]
