from urllib.parse import quote

from zotswipe.domain.entities.swipe_listing import SwipeListing
from zotswipe.domain.phone_number import phone_digits

DEFAULT_GREETING = "Hi, I saw your listing of buying swipes on ZotSwipe."

# Characters left unescaped in a URL query component
_QUERY_SAFE = "!$&'()*+,/:;=?@"


def build_sms_link(listing: SwipeListing, greeting: str = DEFAULT_GREETING) -> str:
    """SMS deep link that opens a message to the listing's buyer."""
    number = phone_digits(listing.contact_phone)
    return quote(f"sms:{number}&body={greeting}", safe=_QUERY_SAFE)
