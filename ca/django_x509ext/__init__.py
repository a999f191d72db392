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

"""django-x509ext root module."""

from importlib.metadata import PackageNotFoundError, version

from packaging.version import Version as PackagingVersion

from django_x509ext.encoder import add_critical_prefix, encode
from django_x509ext.exceptions import (
    Error,
    InvalidValueSyntax,
    MalformedPayload,
    NoPrinterAvailable,
    ResourceExhausted,
    UnknownExtensionType,
)
from django_x509ext.extension import Extension, extensions_from_certificate
from django_x509ext.formatter import format_extension

try:
    __version__ = version("django-x509ext")

    __packaging_version__ = PackagingVersion(__version__)
    VERSION: tuple[int | str, ...] = __packaging_version__.release
    if __packaging_version__.dev:  # pragma: no cover
        VERSION = (*VERSION, "dev", __packaging_version__.dev)
    if __packaging_version__.pre:  # pragma: no cover
        VERSION = (*VERSION, "pre", *__packaging_version__.pre)
    if __packaging_version__.post:  # pragma: no cover
        VERSION = (*VERSION, "post", __packaging_version__.post)
except PackageNotFoundError:  # pragma: no cover  # package is not installed
    pass

__all__ = [
    "Error",
    "Extension",
    "InvalidValueSyntax",
    "MalformedPayload",
    "NoPrinterAvailable",
    "ResourceExhausted",
    "UnknownExtensionType",
    "add_critical_prefix",
    "encode",
    "extensions_from_certificate",
    "format_extension",
]
