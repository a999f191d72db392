# This file is part of django-x509ext.
#
# django-x509ext is free software: you can redistribute it and/or modify it under the terms of the GNU
# General Public License as published by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# django-x509ext is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even
# the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public
# License for more details.
#
# You should have received a copy of the GNU General Public License along with django-x509ext. If not, see
# <http://www.gnu.org/licenses/>.

"""``django_x509ext.extensions.utils`` contains helpers shared by value parsers and printers."""

from asn1crypto.core import BitString

from django_x509ext.constants import WHITESPACE
from django_x509ext.typehints import ValueList


def parse_value_list(value: str) -> ValueList:
    """Parse a comma-separated list of ``name:value`` or ``name`` elements.

    Whitespace around names and values is removed, colons after the first one are part of the value:

    >>> parse_value_list("CA:TRUE, pathlen:0")
    [('CA', 'TRUE'), ('pathlen', '0')]
    >>> parse_value_list("digitalSignature,URI:http://example.com")
    [('digitalSignature', None), ('URI', 'http://example.com')]

    Empty names or values are an error:

    >>> parse_value_list("CA:TRUE,")
    Traceback (most recent call last):
        ...
    ValueError: Invalid empty name in "CA:TRUE,"
    """
    values: ValueList = []
    for item in value.split(","):
        if ":" in item:
            name, item_value = (part.strip(WHITESPACE) for part in item.split(":", 1))
            if not item_value:
                raise ValueError(f'Invalid empty value for {name} in "{value}"')
        else:
            name, item_value = item.strip(WHITESPACE), None

        if not name:
            raise ValueError(f'Invalid empty name in "{value}"')
        values.append((name, item_value))
    return values


def named_bits(value: BitString) -> list[int]:
    """Get the positions of all named bits that are set in a bit string."""
    names = value.native
    bit_map = value._map  # pylint: disable=protected-access
    return sorted(index for index, name in bit_map.items() if name in names)
