"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "report_title": {
        "ko": "일출·일몰 시각",
        "en": "Sun times",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "label_date": {
        "ko": "날짜",
        "en": "Date",
    },
    "label_timezone": {
        "ko": "시간대",
        "en": "Time zone",
    },
    "label_algorithm": {
        "ko": "알고리즘",
        "en": "Algorithm",
    },
    "sunrise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "sunset": {
        "ko": "일몰",
        "en": "Sunset",
    },
    "civil_dawn": {
        "ko": "시민 박명 시작",
        "en": "Civil dawn",
    },
    "civil_dusk": {
        "ko": "시민 박명 끝",
        "en": "Civil dusk",
    },
    "nautical_dawn": {
        "ko": "항해 박명 시작",
        "en": "Nautical dawn",
    },
    "nautical_dusk": {
        "ko": "항해 박명 끝",
        "en": "Nautical dusk",
    },
    "astronomical_dawn": {
        "ko": "천문 박명 시작",
        "en": "Astronomical dawn",
    },
    "astronomical_dusk": {
        "ko": "천문 박명 끝",
        "en": "Astronomical dusk",
    },
    "day_length": {
        "ko": "낮의 길이",
        "en": "Day length",
    },
    "civil_day_length": {
        "ko": "시민 박명 포함",
        "en": "incl. civil twilight",
    },
    "nautical_day_length": {
        "ko": "항해 박명 포함",
        "en": "incl. nautical twilight",
    },
    "astronomical_day_length": {
        "ko": "천문 박명 포함",
        "en": "incl. astronomical twilight",
    },
    "no_event": {
        "ko": "없음",
        "en": "none",
    },
    "error_address": {
        "ko": "주소를 찾을 수 없어요. 띄어쓰기를 포함해서 입력해보세요. ({error})",
        "en": "Address not found. Try a more specific address. ({error})",
    },
    "error_timezone": {
        "ko": "알 수 없는 시간대예요. ({error})",
        "en": "Unknown time zone. ({error})",
    },
    "error_network": {
        "ko": "지오코딩 서버에 연결하지 못했어요. ({error})",
        "en": "Could not reach the geocoding service. ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
