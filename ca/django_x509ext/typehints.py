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

"""Various type aliases used throughout django-x509ext."""

from typing import Any, Callable, Optional, Union

from cryptography import x509

# IMPORTANT: Do **not** import any module from django_x509ext here, or you risk circular imports.

#: A parsed list of ``name:value`` pairs. The value is ``None`` if the element had no colon.
ValueList = list[tuple[str, Optional[str]]]

#: Type name or value passed to the encoder, bytes must be UTF-8 encoded.
ExtensionValue = Union[str, bytes]

#: Function creating an extension value from a string and a
#: :py:class:`~django_x509ext.extensions.parse.ValueContext`.
ExtensionParser = Callable[[str, Any], x509.ExtensionType]

#: Function rendering a decoded asn1crypto value as text.
ExtensionPrinter = Callable[[Any], str]
