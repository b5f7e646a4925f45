"""Color value object shared by catalogue variants, cart lines and order items."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


@storefront.value_object
class Color:
    """A named color with its hex code, e.g. ``Red`` / ``#FF0000``."""

    name = String(max_length=50)
    hex_code = String(max_length=9)

    @invariant.post
    def name_or_hex_required(self):
        if not self.name and not self.hex_code:
            raise ValidationError({"color": ["A color needs a name or a hex code"]})

    @invariant.post
    def hex_code_must_be_well_formed(self):
        if self.hex_code and not _HEX_PATTERN.match(self.hex_code):
            raise ValidationError({"hex_code": [f"Invalid hex color: {self.hex_code!r}"]})
