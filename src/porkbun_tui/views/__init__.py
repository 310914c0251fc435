from .availability import AvailabilityView
from .base import View
from .calendar import CalendarView, MonthGroup
from .detail import DetailView
from .dns import DNSView
from .domains import DomainsView
from .grouped import Group, GroupedViewport
from .help import HelpView
from .listing import ListEngine
from .nameservers import NameserversView, NSMode, PRESETS
from .tld import TLDGroup, TLDView

__all__ = [
    "View",
    "ListEngine",
    "Group",
    "GroupedViewport",
    "DomainsView",
    "DetailView",
    "DNSView",
    "NameserversView",
    "NSMode",
    "PRESETS",
    "AvailabilityView",
    "TLDView",
    "TLDGroup",
    "CalendarView",
    "MonthGroup",
    "HelpView",
]
