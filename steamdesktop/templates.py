from jinja2 import Environment

# freedesktop.org launcher; the blank line at the end is part of the format we emit
DESKTOP_ENTRY = r"""[Desktop Entry]
Name={{ game.name }}
Comment=Play this game on Steam
Exec=steam steam://rungameid/{{ game.id }}
Icon={{ icon }}
Terminal=false
Type=Application
Categories=Game;

"""

_env = Environment(keep_trailing_newline=True, autoescape=False)

def render_desktop_entry(game, icon: str) -> str:
    return _env.from_string(DESKTOP_ENTRY).render(game=game, icon=icon)
