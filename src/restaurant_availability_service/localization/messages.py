"""Customer-facing status messages.

Message text lives here so the availability rules stay free of prose. The
Arabic catalog matches the wording customers see in the app and is the default
display locale.
"""

import logging
from dataclasses import dataclass

from restaurant_availability_service.models.schedule_models import Weekday

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "ar"


@dataclass(frozen=True)
class MessageCatalog:
    """Localised weekday names and message templates.

    Templates use ``str.format`` placeholders: ``{time}`` for a clock time,
    ``{day}`` for a day label and ``{message}`` for a status message.
    ``today`` and ``tomorrow`` label the next opening time on their own, while
    ``tomorrow_in_message`` is the same word as it reads inside a sentence.
    """

    locale: str
    day_names: tuple[str, str, str, str, str, str, str]
    today: str
    tomorrow: str
    tomorrow_in_message: str
    temporarily_closed: str
    closed: str
    closed_today: str
    open_until: str
    closing_soon: str
    opens_later_today: str
    opens_on_day: str
    next_open_time: str
    order_refused: str

    def day_name(self, day: Weekday) -> str:
        """Get the localised name of a weekday (0=Sunday)."""
        return self.day_names[day.value]


ARABIC = MessageCatalog(
    locale="ar",
    day_names=("الأحد", "الإثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت"),
    today="اليوم",
    tomorrow="غداً",
    tomorrow_in_message="غداً",
    temporarily_closed="مغلق مؤقتاً",
    closed="مغلق",
    closed_today="مغلق اليوم - يفتح {day} {time}",
    open_until="مفتوح حتى {time}",
    closing_soon="مفتوح - يغلق الساعة {time}",
    opens_later_today="مغلق - يفتح اليوم الساعة {time}",
    opens_on_day="مغلق - يفتح {day} الساعة {time}",
    next_open_time="{day} {time}",
    order_refused="عذراً، لا يمكن الطلب الآن. {message}",
)

ENGLISH = MessageCatalog(
    locale="en",
    day_names=("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    today="Today",
    tomorrow="Tomorrow",
    tomorrow_in_message="tomorrow",
    temporarily_closed="Temporarily closed",
    closed="Closed",
    closed_today="Closed today - opens {day} {time}",
    open_until="Open until {time}",
    closing_soon="Open - closes at {time}",
    opens_later_today="Closed - opens today at {time}",
    opens_on_day="Closed - opens {day} at {time}",
    next_open_time="{day} {time}",
    order_refused="Sorry, you cannot order right now. {message}",
)

CATALOGS: dict[str, MessageCatalog] = {
    ARABIC.locale: ARABIC,
    ENGLISH.locale: ENGLISH,
}


def _primary_language(locale: str) -> str:
    return locale.strip().replace("_", "-").split("-")[0].lower()


def get_message_catalog(locale: str | None = None, default: str = DEFAULT_LOCALE) -> MessageCatalog:
    """Resolve a locale to a message catalog.

    Only the primary language subtag is considered, so "ar-SA" and "en_US"
    resolve to the Arabic and English catalogs. Unknown locales fall back to
    ``default``, and an unknown default falls back to Arabic.

    Args:
        locale: Requested locale, e.g. "en", "ar-EG"
        default: Locale to use when ``locale`` is missing or unsupported

    Returns:
        MessageCatalog: Catalog for the resolved locale
    """
    if locale:
        catalog = CATALOGS.get(_primary_language(locale))
        if catalog is not None:
            return catalog
        logger.debug(f"Unsupported locale {locale!r}, using {default}")

    return CATALOGS.get(_primary_language(default), ARABIC)


def parse_accept_language(header: str | None) -> str | None:
    """Pick the first language tag from an Accept-Language header.

    Quality values are ignored; the client's ordering is trusted.

    Args:
        header: Raw header value, e.g. "en-US,en;q=0.9,ar;q=0.8"

    Returns:
        The first language tag, or None if the header is empty or a wildcard
    """
    if not header:
        return None

    for part in header.split(","):
        tag = part.split(";")[0].strip()
        if tag and tag != "*":
            return tag

    return None
