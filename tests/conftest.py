"""Shared fixtures: rendered man page text as `man` prints it."""

from __future__ import annotations

import pytest

from manuals.manpage import split_lines


LS_PAGE = """\
LS(1)                            User Commands                           LS(1)

NAME
       ls - list directory contents

SYNOPSIS
       ls [OPTION]... [FILE]...

DESCRIPTION
       List information about the FILEs (the current directory by default).
       See dircolors(1) and the full documentation at info(1).

SEE ALSO
       dircolors(1), git-annotate(1), stat(2)

GNU coreutils 9.4                 April 2024                            LS(1)
"""

# Auto-generated perl manual with a quoted section name
PERL_PAGE = """\
IO::Socket::IP(3perl)  Perl Programmers Reference Guide  IO::Socket::IP(3perl)

NAME
       IO::Socket::IP - Family-neutral IP socket

"IO::Socket::INET" INCOMPATIBILITES
       The behaviour differs from IO::Socket::INET(3perl) in places.

SEE ALSO
       IO::Socket::INET, perlipc(1)

perl v5.36.0                      2023-11-25              IO::Socket::IP(3perl)
"""

# No section headings at all
BARE_PAGE = """\
FOO(1)

       foo does things, see bar(1).
       Nothing else to say.

1.0                                2024                                  FOO(1)
"""


@pytest.fixture()
def ls_text() -> str:
    return LS_PAGE


@pytest.fixture()
def ls_lines() -> list:
    return split_lines(LS_PAGE)


@pytest.fixture()
def perl_lines() -> list:
    return split_lines(PERL_PAGE)


@pytest.fixture()
def bare_text() -> str:
    return BARE_PAGE
