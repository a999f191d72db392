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

"""Run doctests of all modules."""

import pytest

from django_x509ext.tests.base.doctest import doctest_module


@pytest.mark.parametrize(
    "module",
    (
        "django_x509ext.conf",
        "django_x509ext.encoder",
        "django_x509ext.extension",
        "django_x509ext.extensions.parse",
        "django_x509ext.extensions.utils",
        "django_x509ext.formatter",
        "django_x509ext.pydantic.validators",
        "django_x509ext.registry",
        "django_x509ext.utils",
    ),
)
def test_doctests(module: str) -> None:
    """Load doctests."""
    failures, _tests = doctest_module(module)
    assert failures == 0, f"{failures} doctests failed, see above for output."
