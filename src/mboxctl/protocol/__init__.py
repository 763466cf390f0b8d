"""Protocol layer: message codec, command builders, status codes, reply parsing."""

from .framing import CommandMessage, ResponseMessage, encode_command, decode_response
from .commands import Command, ResumeFlag, build_command
from .status import DaemonStatus, describe_status
from .parser import DaemonState
