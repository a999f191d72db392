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

"""Assertions used in tests."""

from collections.abc import Iterator
from contextlib import contextmanager

from django.core.exceptions import ImproperlyConfigured

import pytest

from django_x509ext.extension import Extension


@contextmanager
def assert_improperly_configured(msg: str) -> Iterator[None]:
    """Shortcut for testing that the code raises ImproperlyConfigured with the given message."""
    with pytest.raises(ImproperlyConfigured, match=msg):
        yield


def assert_extension(extension: Extension, short_name: str, critical: bool, text: str) -> None:
    """Assert basic properties of an extension."""
    assert extension.short_name() == short_name.encode("ascii")
    assert extension.critical() is critical
    assert extension.format() == text
    assert str(extension) == text

