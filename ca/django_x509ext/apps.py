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

"""Default Django app configuration.

.. seealso:: https://docs.djangoproject.com/en/dev/ref/applications/
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DjangoX509ExtConfig(AppConfig):
    """Standard configuration."""

    name = "django_x509ext"
    verbose_name = _("X.509 extensions")

    def ready(self) -> None:
        # pylint: disable=import-outside-toplevel  # that's how checks work

        from django_x509ext import checks  # NOQA: F401  # import already registers the checks
