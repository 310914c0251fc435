"""
Nameserver viewer and editor

Three modes: view (current list), edit (fixed set of text fields) and
preset (pick a well-known NS bundle that overwrites every field).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import config
from ..keys import keys
from ..registrar.base import is_api_access_error
from ..styles import ERROR, HELP, LABEL, SEARCH, SELECTED, SPINNER, SUCCESS, TITLE, VALUE, Line
from .base import View
from .dns import api_access_hint
from .textinput import TextInput


class NSMode(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    PRESET = "preset"


@dataclass(frozen=True)
class NSPreset:
    name: str
    nameservers: tuple[str, ...]


PRESETS = (
    NSPreset("Porkbun Default", (
        "maceio.ns.porkbun.com", "curitiba.ns.porkbun.com",
        "salvador.ns.porkbun.com", "fortaleza.ns.porkbun.com",
    )),
    NSPreset("Cloudflare", ("ns1.cloudflare.com", "ns2.cloudflare.com")),
    NSPreset("Google Cloud DNS", (
        "ns-cloud-a1.googledomains.com", "ns-cloud-a2.googledomains.com",
        "ns-cloud-a3.googledomains.com", "ns-cloud-a4.googledomains.com",
    )),
)


class NameserversView(View):

    def __init__(self, field_count: Optional[int] = None):
        super().__init__()
        self.field_count = field_count or config.ui.nameserver_fields
        self.domain = ""
        self.nameservers: list[str] = []
        self.inputs = self._blank_inputs()
        self.focus = 0
        self.mode = NSMode.VIEW
        self.preset_index = 0
        self.loading = False
        self.saving = False
        self.save_requested = False
        self.error: Optional[BaseException] = None
        self.success = ""

    def _blank_inputs(self) -> list[TextInput]:
        return [
            TextInput(placeholder=f"ns{i + 1}.example.com", char_limit=100)
            for i in range(self.field_count)
        ]

    @property
    def captures_text(self) -> bool:
        return self.mode == NSMode.EDIT

    @property
    def at_top_level(self) -> bool:
        """Whether esc should leave the view rather than a sub-mode."""
        return self.mode == NSMode.VIEW and not self.saving

    def set_domain(self, domain: str) -> None:
        self.domain = domain
        self.nameservers = []
        self.inputs = self._blank_inputs()
        self.loading = True
        self.saving = False
        self.save_requested = False
        self.error = None
        self.success = ""
        self.mode = NSMode.VIEW

    def set_nameservers(self, nameservers: list[str]) -> None:
        self.nameservers = list(nameservers)
        self.loading = False
        self.inputs = self._blank_inputs()
        for field, value in zip(self.inputs, self.nameservers):
            field.set_value(value)
        self.focus = 0

    def set_error(self, error: BaseException) -> None:
        self.error = error
        self.loading = False
        self.saving = False

    def set_success(self, message: str) -> None:
        self.success = message
        self.saving = False
        self.mode = NSMode.VIEW

    def values(self) -> list[str]:
        """Non-empty field values in order."""
        return [v for v in (f.value.strip() for f in self.inputs) if v]

    def take_save_request(self) -> Optional[list[str]]:
        """Nameservers to save if the user just asked to, else None."""
        if not self.save_requested:
            return None
        self.save_requested = False
        return self.values()

    def _focus(self, index: int) -> None:
        self.inputs[self.focus].blur()
        self.focus = index % len(self.inputs)
        self.inputs[self.focus].focus()

    def handle_input(self, key: str) -> None:
        if self.mode == NSMode.EDIT:
            self._handle_edit(key)
        elif self.mode == NSMode.PRESET:
            self._handle_preset(key)
        elif not self.loading:
            if keys.edit.matches(key):
                self.mode = NSMode.EDIT
                self._focus(0)
            elif keys.presets.matches(key):
                self.mode = NSMode.PRESET
                self.preset_index = 0

    def _handle_edit(self, key: str) -> None:
        if self.saving:
            return
        if keys.back.matches(key):
            self.inputs[self.focus].blur()
            self.mode = NSMode.VIEW
        elif keys.tab.matches(key) or key in ("down", "ctrl+j"):
            self._focus(self.focus + 1)
        elif key in ("up", "ctrl+k"):
            self._focus(self.focus - 1)
        elif keys.save.matches(key):
            self.saving = True
            self.save_requested = True
            self.error = None
            self.success = ""
        else:
            self.inputs[self.focus].handle_key(key)

    def _handle_preset(self, key: str) -> None:
        if keys.back.matches(key):
            self.mode = NSMode.VIEW
        elif keys.up.matches(key):
            self.preset_index = max(0, self.preset_index - 1)
        elif keys.down.matches(key):
            self.preset_index = min(len(PRESETS) - 1, self.preset_index + 1)
        elif keys.enter.matches(key):
            preset = PRESETS[self.preset_index]
            for i, field in enumerate(self.inputs):
                field.set_value(preset.nameservers[i] if i < len(preset.nameservers) else "")
            self.mode = NSMode.EDIT
            self._focus(0)

    def render(self) -> list[Line]:
        lines = [Line.of(f" Nameservers: {self.domain} ", TITLE), Line()]

        if self.loading:
            lines.append(Line.of("  Loading nameservers..."))
            return lines

        if self.error is not None:
            lines.append(Line.of(f"  Error: {self.error}", ERROR))
            if is_api_access_error(self.error):
                lines.extend(api_access_hint(self.domain))
            lines.append(Line())

        if self.success:
            lines.append(Line.of(f"  {self.success}", SUCCESS))
            lines.append(Line())

        if self.mode == NSMode.PRESET:
            lines.append(Line.of("  Select a preset:"))
            lines.append(Line())
            for i, preset in enumerate(PRESETS):
                if i == self.preset_index:
                    lines.append(Line.of(f"> {preset.name}", SELECTED))
                else:
                    lines.append(Line.of(f"  {preset.name}"))
            lines.append(Line())
            lines.append(Line.of("  enter to apply, esc to cancel", HELP))

        elif self.mode == NSMode.EDIT:
            lines.append(Line.of("  Edit nameservers:"))
            lines.append(Line())
            for i, field in enumerate(self.inputs):
                row = Line.of(f"  NS{i + 1}: ", LABEL)
                row.extend(field.render(SEARCH if i == self.focus else ""))
                lines.append(row)
            lines.append(Line())
            if self.saving:
                lines.append(Line.of("  Saving...", SPINNER))
            else:
                lines.append(Line.of("  tab/↑/↓ to navigate, ctrl+s to save, esc to cancel", HELP))

        else:
            lines.append(Line.of("  Current nameservers:"))
            lines.append(Line())
            if not self.nameservers:
                lines.append(Line.of("  No nameservers configured."))
            for i, ns in enumerate(self.nameservers):
                lines.append(Line.of(f"  {i + 1}. ").add(ns, VALUE))
            lines.append(Line())
            lines.append(Line.of("  e to edit, p for presets, esc to go back", HELP))

        return lines

    def status_text(self) -> str:
        return f"{len(self.nameservers)} nameservers"

    def help_text(self) -> list[tuple[str, str]]:
        if self.mode == NSMode.EDIT:
            return [("tab/↑/↓", "navigate"), ("ctrl+s", "save"), ("esc", "cancel")]
        if self.mode == NSMode.PRESET:
            return [("j/k", "navigate"), ("enter", "apply"), ("esc", "cancel")]
        return [keys.edit.help, keys.presets.help, keys.back.help, keys.quit.help]
