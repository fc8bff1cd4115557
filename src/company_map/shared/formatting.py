"""
Display formatting for registry values: dates, company types, jurisdictions and SIC codes.
"""

from datetime import date, datetime

NOT_AVAILABLE = "N/A"

COMPANY_TYPES = {
    "ltd": "Private Limited Company",
    "plc": "Public Limited Company",
    "llp": "Limited Liability Partnership",
    "limited-partnership": "Limited Partnership",
    "private-limited-guarant-nsc": "Private Limited by Guarantee",
    "private-limited-guarant-nsc-limited-exemption": "Private Limited by Guarantee",
    "oversea-company": "Overseas Company",
}

JURISDICTIONS = {
    "england-wales": "England & Wales",
    "scotland": "Scotland",
    "northern-ireland": "Northern Ireland",
    "united-kingdom": "United Kingdom",
    "great-britain": "Great Britain",
}

SIC_DESCRIPTIONS = {
    "62020": "Information technology consultancy activities",
    "62012": "Business and domestic software development",
    "62090": "Other information technology service activities",
    "62011": "Ready-made interactive leisure and entertainment software development",
    "70229": "Management consultancy activities other than financial management",
    "74909": "Other professional, scientific and technical activities n.e.c.",
    "82990": "Other business support service activities n.e.c.",
    "68209": "Other letting and operating of own or leased real estate",
    "68100": "Buying and selling of own real estate",
    "41100": "Development of building projects",
    "64209": "Activities of other holding companies n.e.c.",
    "64999": "Financial intermediation not elsewhere classified",
    "66190": "Activities auxiliary to financial services n.e.c.",
    "69102": "Solicitors",
    "69201": "Accounting and auditing activities",
    "69202": "Bookkeeping activities",
    "69203": "Tax consultancy",
    "86210": "General medical practice activities",
    "86220": "Specialist medical practice activities",
    "86230": "Dental practice activities",
    "47910": "Retail sale via mail order houses or via Internet",
    "47190": "Other retail sale in non-specialised stores",
    "47710": "Retail sale of clothing in specialised stores",
    "56101": "Licenced restaurants",
    "56102": "Unlicenced restaurants and cafes",
    "56302": "Public houses and bars",
    "55100": "Hotels and similar accommodation",
    "49410": "Freight transport by road",
    "52290": "Other transportation support activities",
    "43210": "Electrical installation",
    "43220": "Plumbing, heat and air-conditioning installation",
    "43390": "Other building completion and finishing",
    "43999": "Other specialised construction activities n.e.c.",
    "96020": "Hairdressing and other beauty treatment",
    "96090": "Other personal service activities n.e.c.",
    "93199": "Other sports activities",
    "93290": "Other amusement and recreation activities n.e.c.",
    "85590": "Other education n.e.c.",
    "85600": "Educational support activities",
    "88100": "Social work activities without accommodation for the elderly and disabled",
    "88990": "Other social work activities without accommodation n.e.c.",
    "90010": "Performing arts",
    "90020": "Support activities to performing arts",
    "90030": "Artistic creation",
    "32990": "Other manufacturing n.e.c.",
    "33120": "Repair of machinery",
    "33140": "Repair of electrical equipment",
    "45200": "Maintenance and repair of motor vehicles",
    "45111": "Sale of new cars and light motor vehicles",
    "45112": "Sale of used cars and light motor vehicles",
    "71111": "Architectural activities",
    "71121": "Engineering design activities for industrial process and production",
    "71122": "Engineering related scientific and technical consulting activities",
    "71129": "Other engineering activities",
    "73110": "Advertising agencies",
    "73120": "Media representation",
    "74100": "Specialised design activities",
    "74300": "Translation and interpretation activities",
    "78109": "Other activities of employment placement agencies",
    "78200": "Temporary employment agency activities",
    "78300": "Other human resources provision",
    "81100": "Combined facilities support activities",
    "81210": "General cleaning of buildings",
    "81299": "Other cleaning services",
    "81300": "Landscape service activities",
    "82110": "Combined office administrative service activities",
    "82200": "Activities of call centres",
    "82920": "Packaging activities",
    "99999": "Dormant Company",
}


def _parse_date(value: str) -> date | None:
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def format_date(value: str | None) -> str:
    """Format an ISO date as dd/mm/yyyy.

    Args:
        value: Date string as returned by the registry (YYYY-MM-DD)

    Returns:
        Formatted date, "N/A" when absent, or the raw value if it cannot be parsed
    """
    if not value:
        return NOT_AVAILABLE
    parsed = _parse_date(value)
    return parsed.strftime("%d/%m/%Y") if parsed else value


def format_long_date(value: str | None) -> str:
    """Format an ISO date as e.g. "5 March 2020"."""
    if not value:
        return NOT_AVAILABLE
    parsed = _parse_date(value)
    return f"{parsed.day} {parsed.strftime('%B %Y')}" if parsed else value


def _title_words(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split("-"))


def format_company_type(value: str | None) -> str:
    """Readable company type for a registry type code."""
    if not value:
        return NOT_AVAILABLE
    return COMPANY_TYPES.get(value) or _title_words(value)


def format_jurisdiction(value: str | None) -> str:
    """Readable jurisdiction name for a registry jurisdiction code."""
    if not value:
        return NOT_AVAILABLE
    return JURISDICTIONS.get(value) or _title_words(value)


def sic_description(code: str) -> str:
    return SIC_DESCRIPTIONS.get(code, "Activity description not available")


def display_value(value: object) -> str:
    """Render-time fallback: absent or empty values display as "N/A"."""
    if value is None or value == "" or value == []:
        return NOT_AVAILABLE
    return str(value)
