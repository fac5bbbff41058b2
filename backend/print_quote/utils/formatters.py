from typing import Dict, Optional

SERVICE_TYPE_NAMES = {
    "printing": "印刷",
    "binding": "製本",
    "logistics": "物流",
    "eco-printing": "環境印刷",
    "sdgs-consulting": "SDGsコンサルティング",
    "sustainability-report": "サステナビリティレポート",
}

PRODUCT_TYPE_NAMES = {
    "business-card": "名刺",
    "flyer": "チラシ",
    "brochure": "パンフレット",
    "poster": "ポスター",
    "booklet": "冊子",
    "postcard": "ポストカード",
    "stationery": "文房具",
    "softcover-book": "ソフトカバー書籍",
    "hardcover-book": "ハードカバー書籍",
    "spiral-bound": "スパイラル製本",
    "perfect-bound": "無線綴じ冊子",
    "other": "その他",
}

SIZE_NAMES = {
    "a3": "A3",
    "a4": "A4",
    "a5": "A5",
    "a6": "A6",
    "b4": "B4",
    "b5": "B5",
    "postcard": "ハガキ",
    "business-card": "名刺サイズ",
    "custom": "カスタム",
}

PAPER_TYPE_NAMES = {
    "standard": "普通紙",
    "premium": "上質紙",
    "recycled": "再生紙",
    "glossy": "光沢紙",
    "matte": "マット紙",
    "textured": "エンボス紙",
    "eco-friendly": "エコフレンドリー",
    "fsc-certified": "FSC認証紙",
}

PRINT_COLOR_NAMES = {
    "black-and-white": "モノクロ",
    "full-color-one-side": "フルカラー（片面）",
    "full-color-both-sides": "フルカラー（両面）",
    "spot-color": "特色",
    "pantone": "パントン",
    "vegetable-ink": "植物性インク",
}

FINISHING_NAMES = {
    "none": "なし",
    "folding": "折り",
    "binding": "製本",
    "lamination": "ラミネート",
    "die-cutting": "型抜き",
    "embossing": "エンボス",
    "foil-stamping": "箔押し",
    "uv-coating": "UVコート",
    "eco-varnish": "エコニス加工",
}


def service_type_name(code: Optional[str]) -> str:
    if not code:
        return "不明"
    return SERVICE_TYPE_NAMES.get(code, code)


def product_type_name(code: str) -> str:
    return PRODUCT_TYPE_NAMES.get(code, code)


def size_name(code: str) -> str:
    # sizes arrive both as "A4" and "a4"
    return SIZE_NAMES.get(code.lower(), code) if code else code


def paper_type_name(code: str) -> str:
    return PAPER_TYPE_NAMES.get(code, code)


def print_color_name(code: str) -> str:
    return PRINT_COLOR_NAMES.get(code, code)


def finishing_name(code: str) -> str:
    return FINISHING_NAMES.get(code, code)


def format_price(price: float) -> str:
    """Yen with thousands separators and no decimals, e.g. ``¥42,500``."""
    return f"¥{round(price):,}"


def discount_amount(price: int, discount_applied: Optional[float]) -> Optional[Dict[str, float]]:
    """Recover the pre-discount figure from a discounted price.

    Returns None when no discount was applied, or when a full discount
    leaves nothing to recover the original from.
    """
    if not discount_applied or discount_applied >= 1:
        return None
    original = round(price / (1 - discount_applied))
    return {
        "discount_percentage": discount_applied * 100,
        "discount_amount": original - price,
    }
