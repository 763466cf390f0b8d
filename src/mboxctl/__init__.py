"""Control client for the mailbox flash-access daemon."""

NAME = "MBOX Control"
VERSION = 1
SUBVERSION = 0

__version__ = f"{VERSION}.{SUBVERSION}"
