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

"""Helper functions for doctests."""

import doctest
import importlib
import re
from typing import Any, Optional

STRIP_WHITESPACE = doctest.register_optionflag("STRIP_WHITESPACE")


class OutputChecker(doctest.OutputChecker):
    """Custom output checker to enable the STRIP_WHITESPACE option."""

    def check_output(self, want: str, got: str, optionflags: int) -> bool:
        if optionflags & STRIP_WHITESPACE:
            want = re.sub(r"\s*", "", want)
            got = re.sub(r"\s*", "", got)
        return super().check_output(want, got, optionflags)


def doctest_module(
    module: str, extraglobs: Optional[dict[str, Any]] = None, optionflags: int = 0
) -> doctest.TestResults:
    """Shortcut for running doctests in the given Python module.

    This function is based on :py:func:`doctest.testmod`, but imports `module` by its dotted path and uses an
    output checker that knows the ``STRIP_WHITESPACE`` option.
    """
    finder = doctest.DocTestFinder()
    runner = doctest.DocTestRunner(verbose=False, optionflags=optionflags, checker=OutputChecker())

    mod = importlib.import_module(module)
    for test in finder.find(mod, extraglobs=extraglobs):
        runner.run(test)

    return doctest.TestResults(runner.failures, runner.tries)
