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

"""Exceptions raised by django-x509ext.

All exceptions derive from :py:class:`~django_x509ext.exceptions.Error` and additionally from the builtin
exception closest to their meaning, so callers that only know about ``ValueError`` keep working.
"""


class Error(Exception):
    """Base class for all errors raised when encoding or formatting extensions."""


class UnknownExtensionType(Error, ValueError):
    """The extension type name does not resolve to an extension that can be created."""


class InvalidValueSyntax(Error, ValueError):
    """The extension value is not valid for the extension type or needs unavailable context."""


class ResourceExhausted(Error, MemoryError):
    """Memory could not be allocated while building an extension."""


class MalformedPayload(Error, ValueError):
    """The DER payload of an extension does not decode with the expected template."""


class NoPrinterAvailable(Error, LookupError):
    """No value printer is registered for the extension."""
