"""
Help, program-usage and version renderers (Rich-based, color-aware).

Palette keys
- usage-label, program-name, command-name, description-section, footer-section
- group-label, argument-description, option-name, flag-name, metavar
- commands-title, commands-table, commands, commands-description
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.

Every renderer prints to the console it is given; the engine passes a console
bound to the real standard output, never to a command sink.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .parameters import Option
from .schema import HELP_TOKEN

_PALETTE = {
    # === Head sections ===
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "command-name": "bold #36C5F0",  # SKY-BLUE → softer than cyan
    "description-section": "italic #A3A3A3",  # Neutral gray
    "footer-section": "#737373",  # Dim footer gray

    # === Groups / arguments ===
    "group-label": "bold #FFFFFF",
    "argument-description": "#9CA3AF",
    "option-name": "bold #00E6FF",
    "flag-name": "bold #22C55E",
    "metavar": "bold #FFD600",

    # === Commands table ===
    "commands-title": "bold #FFFFFF",
    "commands-table": "#4B5563",
    "commands": "bold #36C5F0",
    "commands-description": "#9CA3AF",

    # === Fancy panel ===
    "panel-title": "bold #FF4D94",
}

_PADDING = 2
_INDENT = 24


def _styles():
    return defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))


def _texter(colorful):
    styles = _styles()

    def text(fragment, style=""):
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    return text


def _frame(renders, title, *, settings, text):
    renderable = Group(*renders)
    if settings.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", text(title.upper(), "panel-title"), " ]"),
            title_align="left",
        )
    return renderable


def _names(parameter, text):
    style = "option-name" if isinstance(parameter, Option) else "flag-name"
    return Text(" | ").join(text(name, style) for name in parameter.names)


def _signature(parameter, text):
    if parameter.valued:
        return Text.assemble(_names(parameter, text), " ", text(parameter.metavar, "metavar"))
    return _names(parameter, text)


def _line(head, descr, console, text):
    # Two-column entry; the description moves to its own line when the head is wide.
    section = Text(" " * _PADDING).append(head)
    if not descr:
        return section
    if len(section) >= _INDENT - 1:
        section.append("\n").append(" " * _INDENT)
    else:
        section.append(" " * (_INDENT - len(section)))
    wrapped = text(descr, "argument-description").wrap(console, max(console.width - _INDENT, 20))
    for index, line in enumerate(wrapped):
        if index:
            section.append("\n").append(" " * _INDENT)
        section.append(line)
    return section


def render_help(descriptor, schema, console, *, settings):
    """
    Render the help document of one command.

    Layout
    - usage line (program, command, every parameter, positionals)
    - description paragraph (when the command has one)
    - one entry per parameter in declaration order, then the positionals entry
    - footer with program name and version
    """
    text = _texter(settings.colorful)
    renders = []

    usage = Text.assemble(
        text("usage", "usage-label"), ": ",
        text(settings.prog, "program-name"), " ",
        text(descriptor.name, "command-name"),
    )
    for parameter in schema.parameters:
        usage.append(" ").append(Text.assemble("[", _signature(parameter, text), "]"))
    if descriptor.positionals is not None:
        usage.append(" ").append(Text.assemble("[", text(descriptor.positionals.metavar, "metavar"), " ...]"))
    renders.append(usage.append("\n"))

    if descriptor.descr:
        renders.append(text(descriptor.descr, "description-section").append("\n"))

    group = Text.assemble(text("options", "group-label"), ":\n")
    for parameter in schema.parameters:
        group.append(_line(_signature(parameter, text), parameter.descr, console, text)).append("\n")
    group.append(_line(text(HELP_TOKEN, "flag-name"), "show this help message and exit", console, text)).append("\n")
    if descriptor.positionals is not None:
        group.append("\n").append(text("positionals", "group-label")).append(":\n")
        group.append(_line(
            Text.assemble(text(descriptor.positionals.metavar, "metavar"), " ..."),
            descriptor.positionals.descr,
            console,
            text,
        )).append("\n")
    renders.append(group)

    renders.append(text("%s %s" % (settings.prog, settings.version), "footer-section"))

    console.print(_frame(renders, "%s help" % descriptor.name, settings=settings, text=text))


def render_program_help(registry, console, *, settings):
    """
    Render the launcher usage: how to call it and which commands exist.
    """
    styles = _styles()
    text = _texter(settings.colorful)
    renders = [Text.assemble(
        text("usage", "usage-label"), ": ",
        text(settings.prog, "program-name"), " ",
        text("<command> [flags...] [positional-args...]", "command-name"), "\n",
    )]

    if len(registry):
        table = Table(
            "name", "help",
            title=text("commands", "commands-title"),
            box=ROUNDED,
            style=styles["commands-table"] if settings.colorful else "",
            header_style=styles["commands-title"] if settings.colorful else "",
        )
        for descriptor in registry.descriptors():
            table.add_row(
                text(descriptor.name, "commands"),
                text(descriptor.descr or "run '%s %s --help' for details" % (settings.prog, descriptor.name), "commands-description"),
            )
        renders.append(table)
    else:
        renders.append(text("no commands are registered", "description-section"))

    renders.append(Text.assemble(
        "\n",
        text("run '%s <command> --help' for the options of a command" % settings.prog, "footer-section"),
        "\n",
        text("%s %s" % (settings.prog, settings.version), "footer-section"),
    ))

    console.print(_frame(renders, "%s help" % settings.prog, settings=settings, text=text))


def render_version(console, *, settings):
    text = _texter(settings.colorful)
    console.print(Text.assemble(text(settings.prog, "program-name"), " ", text(settings.version, "footer-section")))


__all__ = (
    "render_help",
    "render_program_help",
    "render_version",
)
