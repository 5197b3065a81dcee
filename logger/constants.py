# logger/constants.py
"""
Markup and text-pattern constants for ksi.is pages
"""


class HTMLConstants:
    """
    Structural markers observed on ksi.is pages.

    The site has no stable ids; these are the class tokens, alt texts and
    labels the locators and extractors key on.
    """

    # Link markers
    PLAYER_LINK_PREFIX = "/leikmenn/leikmadur?id="
    TEAM_LINK_MARKER = "/oll-mot/mot/lid?id="
    MATCH_LINK_MARKER = "leikur?id="
    COMPETITION_LINK_MARKER = "mot"

    # Lineup region
    GRID_CLASS = "grid"
    TWO_COLUMN_CLASS = "grid-cols-2"
    HOME_ICON_ALT = "Heimamenn"
    AWAY_ICON_ALT = "Gestir"
    STARTING_LABEL = "Byrjunarlið"
    BENCH_LABEL = "Varamenn"
    LINEUP_ROW_CLASS = "group"
    SHIRT_NUMBER_CLASSES = ("w-[20rem]", "body-5")
    GOALKEEPER_MARKER = "(M)"
    MIN_POSITIONAL_LINEUP_LINKS = 5

    # Events region
    EVENTS_LABEL = "atburðir"
    EVENTS_GRID_CLASS = "grid-cols-[1fr_auto_1fr]"
    EVENT_NODE_CLASS = "match-event"
    EVENT_ID_ATTR = "data-event-id"
    EVENT_ROW_CLASS = "col-span-3"
    REVERSED_ROW_CLASS = "flex-row-reverse"
    STOPPAGE_CLASS = "text-[10rem]"
    SUB_ON_LINK_CLASS = "text-[#1A7941]"
    SUB_OFF_LINK_CLASS = "text-[#D80707]"
    MIN_MINUTE_MARKERS_PER_COLUMN = 2
    MAX_EVENT_ROW_TEXT = 220

    # Overview / profile
    MATCH_BANNER_CLASS = "match-banner"
    MAX_SCORE_TEXT = 12
    BIRTH_YEAR_CLASS = "eyebrow-2"
    PROFILE_BLOCK_CLASS = "col-span-12"

    # Standings
    PHASE_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5")
    PHASE_HEADING_LOOKBACK = 10


class ScrapingConstants:
    """
    Regular expressions and lookup tables for text fields
    """

    ID_PATTERN = r"[?&]id=(\d+)"
    COMPETITION_PATH_ID_PATTERN = r"/mot/(\d+)"

    # "22´", "90+2´", "45 + 1'"
    MINUTE_PATTERN = r"(\d{1,3})(?:\s*\+\s*(\d{1,2}))?\s*[´'’]"
    MINUTE_BUBBLE_PATTERN = r"^(\d{1,3})(?:\s*\+\s*(\d{1,2}))?\s*[´'’]?$"
    TRAILING_MINUTE_PATTERN = r"\s+\d{1,3}(?:\s*\+\s*\d{1,2})?\s*[´'’]\s*$"
    MINUTE_GLYPHS = "´'’"
    PUNCTUATION_ONLY_PATTERN = r"^[,.\-–—]+$"

    SCORE_PATTERN = r"(\d+)\s*[-:–]\s*(\d+)"
    GOALS_PAIR_PATTERN = r"(\d+)\s*[-:]\s*(\d+)"
    RANK_PREFIX_PATTERN = r"^(\d+)\s+(.*)$"

    KICKOFF_PATTERN = (
        r"(\d{1,2})\.\s*([A-Za-záðéíóúýþæöÁÐÉÍÓÚÝÞÆÖ]+)\s+(\d{4})\s+(\d{1,2}:\d{2})"
    )
    VENUE_SUFFIX_PATTERN = r"v[öo]llur(?:inn)?$"
    MAX_VENUE_TEXT = 80
    ICELANDIC_MONTHS = {
        "janúar": 1,
        "januar": 1,
        "febrúar": 2,
        "februar": 2,
        "mars": 3,
        "apríl": 4,
        "april": 4,
        "maí": 5,
        "mai": 5,
        "júní": 6,
        "juni": 6,
        "júlí": 7,
        "juli": 7,
        "ágúst": 8,
        "agust": 8,
        "september": 9,
        "október": 10,
        "oktober": 10,
        "nóvember": 11,
        "november": 11,
        "desember": 12,
    }

    BIRTH_YEAR_PATTERN = r"\b(19\d{2}|20\d{2})\b"
    MIN_BIRTH_YEAR = 1940

    # Icelandic letters that are not combining-diacritic forms
    ICELANDIC_FOLDS = {
        "ð": "d",
        "Ð": "d",
        "þ": "th",
        "Þ": "th",
        "æ": "ae",
        "Æ": "ae",
        "ö": "o",
        "Ö": "o",
    }
