"""
Task and message protocol

Anything slow (a registrar call) runs as a one-shot asyncio task that
produces at most one message. Messages land in a single mailbox which the
main loop drains one at a time, so handlers never run concurrently with
each other or with rendering.

A Command is a zero-argument coroutine function. The controller returns
commands from update(); the TaskRunner turns each one into a task.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional

from .models import AvailabilityResult, DNSRecord, Domain, TLDPricing

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Which registrar call a message belongs to."""
    DOMAINS = "domains"
    PRICING = "pricing"
    DNS = "dns"
    NAMESERVERS = "nameservers"
    SAVE_NAMESERVERS = "save_nameservers"
    AVAILABILITY = "availability"


class Message:
    """Base class for everything delivered to the controller."""
    pass


@dataclass
class KeyPressed(Message):
    key: str


@dataclass
class Resized(Message):
    width: int
    height: int


@dataclass
class Tick(Message):
    """Spinner heartbeat."""
    pass


@dataclass
class DomainsLoaded(Message):
    domains: list[Domain]


@dataclass
class PricingLoaded(Message):
    pricing: dict[str, TLDPricing]


@dataclass
class DNSLoaded(Message):
    domain: str
    records: list[DNSRecord]


@dataclass
class NameserversLoaded(Message):
    domain: str
    nameservers: list[str]


@dataclass
class NameserversSaved(Message):
    domain: str
    nameservers: list[str] = field(default_factory=list)


@dataclass
class AvailabilityChecked(Message):
    result: AvailabilityResult


@dataclass
class FetchFailed(Message):
    """A registrar call failed. operation is None for crashes in untagged commands."""
    operation: Optional[Operation]
    error: BaseException
    domain: Optional[str] = None


Command = Callable[[], Awaitable[Optional[Message]]]


def tagged(operation: Operation, domain: Optional[str] = None) -> Callable[[Command], Command]:
    """
    Mark a command with the registrar call it makes.

    If the command crashes, the runner reports the failure under this
    operation and domain so it is routed like an ordinary failed call.
    """
    def decorate(command: Command) -> Command:
        command.operation = operation
        command.domain = domain
        return command
    return decorate


class TaskRunner:
    """
    Spawns commands as independent tasks and posts their results.

    The runner keeps references to running tasks only so they are not
    garbage collected; callers never see how many are outstanding. Tasks
    are not cancelled on view changes and have no timeout of their own.
    """

    def __init__(self, mailbox: "asyncio.Queue[Message]"):
        self.mailbox = mailbox
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, commands: Iterable[Command]) -> None:
        for command in commands:
            task = asyncio.ensure_future(self._run(command))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _run(self, command: Command) -> None:
        try:
            message = await command()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            operation = getattr(command, "operation", None)
            logger.exception("Background task crashed (%s)", operation.value if operation else "untagged")
            message = FetchFailed(operation=operation, error=e, domain=getattr(command, "domain", None))

        if message is not None:
            self.mailbox.put_nowait(message)

    async def shutdown(self) -> None:
        """Cancel whatever is still in flight at exit."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
