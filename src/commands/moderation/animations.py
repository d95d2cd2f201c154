"""
HarborBot - Nuke Animation Frames
=================================

Frame sequences for /nuke and /nukeanimation. Every frame is a complete
message body, played by editing one message in place.
"""

from typing import Dict, List


def _block(art: str) -> str:
    return f"```\n{art.strip(chr(10))}\n```"


_MUSHROOM = _block(r"""
    ____                  ____
   /\   \                /\   \
  /::\   \              /::\   \
 /:/\:\   \            /:/\:\   \
/::\~\:\   \          /::\~\:\   \
/:/\:\ \:\___\        /:/\:\ \:\___\
\/__\:\/:/   /        \/__\:\/:/   /
     \::/   /              \::/   /
     /:/   /               /:/   /
     \/__/                 \/__/
""")

_STARBURST = _block(r"""
           *                  *
          * *                * *
         *   *              *   *
        *     *            *     *
       *       *          *       *
      *         *        *         *
     *           *      *           *
    *             *    *             *
   *               *  *               *
  *                 **                 *
""")

NUKE_FRAMES: List[str] = [
    "```\n🔴 NUKE INCOMING - 3 ```",
    "```\n🔴 NUKE INCOMING - 2 ```",
    "```\n🔴 NUKE INCOMING - 1 ```",
    _MUSHROOM,
    _block(r"""
     ______                   ______
    /      \                 /      \
   /        \               /        \
  /_________\             /_________\
 |  _______  |           |  _______  |
 | |       | |           | |       | |
 | |_______| |           | |_______| |
 |___________|           |___________|
"""),
    _STARBURST,
]
"""Countdown played in the replacement channel before the original is deleted."""


ANIMATIONS: Dict[str, List[str]] = {
    "nuclear": [
        "```\n🔴 NUCLEAR LAUNCH DETECTED - 3 ```",
        "```\n🔴 NUCLEAR LAUNCH DETECTED - 2 ```",
        "```\n🔴 NUCLEAR LAUNCH DETECTED - 1 ```",
        _MUSHROOM,
        _block(r"""
           \                  /
            \                /
            |      __       |
           /|  __/  \_     |\
          / | /      \\    | \
            |/        \|
              \______/
"""),
        _STARBURST,
        _block(r"""
                    ____
                 /\/    \/\
                /          \
               |     __     |
              /|    /  \    |\
             / |   |    |   | \
               |    \__/    |
                \          /
                 \/\____/\/
"""),
        _block(r"""
              .::.
             ::::::
            :::::::::
           ::::::::::
          :::::::::::::
         ::::::::::::::
        ::::::::::::::::
       ::::::::::::::::::
"""),
        _block(r"""
    .-.   .-.      .-.     .-.   .-.      .-.
   /   \ /   \    /   \   /   \ /   \    /   \
  | ... | ... |  | ... | | ... | ... |  | ... |
   \ 0 / \ 0 /    \ 0 /   \ 0 / \ 0 /    \ 0 /
    `-'   `-'      `-'     `-'   `-'      `-'
💥 KABOOM 💥 NUCLEAR DETONATION SUCCESSFUL 💥 KABOOM 💥
"""),
    ],
    "boom": [
        "```\n⚠️ EXPLOSION IMMINENT - 3 ⚠️```",
        "```\n⚠️ EXPLOSION IMMINENT - 2 ⚠️```",
        "```\n⚠️ EXPLOSION IMMINENT - 1 ⚠️```",
        _block(r"""
      _.-^^---....,,--
  _--                  --_
 <                        >)
 |                         |
  \._                   _./
     '''--. . , ; .--'''
           | |   |
        .-=||  | |=-.
        `-=#$%&%$#=-`
           | ;  :|
  _____.,-#%&$@%#&#~,._____
"""),
        _block(r"""
              *
          ****
       *********
     *************
    ***************
   *****************
    ***************
     *************
       *********
          ****
              *
"""),
        _block(r"""
      ____  ____  ____  __  __
     | __ )/ __ \/ __ \|  \/  |
     |  _ \ |  | | |  ||      |
     | |_) | |__| | |__| |\/| |
     |____/ \____/\____|_|  |_|
💥 EXPLOSION COMPLETE 💥
"""),
    ],
    "thanos": [
        "```\nThanos has arrived...```",
        '```\nThanos: "I am inevitable"```',
        "```\n*snap*```",
        _block("""
⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⢀⣀⣀⣀⣀⣀⡀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀
⠀⠀⠀⠀⠀⠀⠀⠀⣠⣶⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⣄⠀⠀⠀⠀⠀⠀⠀⠀⠀
⠀⠀⠀⠀⠀⠀⣠⣾⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⣄⠀⠀⠀⠀⠀⠀⠀
⠀⠀⠀⠀⢀⣾⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⡀⠀⠀⠀⠀⠀
⠀⠀⠀⣴⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣦⠀⠀⠀⠀
⠀⢠⣿⣿⣿⣿⡿⠛⠛⠛⠛⠛⢻⣿⣿⣿⡟⠛⠛⠛⠛⠻⣿⣿⣿⣿⣿⡄⠀⠀
⠀⢸⣿⣿⣿⣿⠃⠀⠀⠀⠀⠀⢸⣿⣿⣿⡇⠀⠀⠀⠀⠀⢹⣿⣿⣿⣿⡇⠀⠀
⢰⣿⣿⠃⣷⣦⣤⣴⣾⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⣦⣤⣴⣷⠘⣿⣿⡆⠀
⠀⠀⠻⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⠟⠀⠀⠀
⠀⠀⠀⠈⠙⠻⢿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⡿⠟⠋⠁⠀⠀⠀⠀
"""),
        _block("""
Half of all life has been snapped away...
Perfectly balanced, as all things should be.
"""),
    ],
}

ANIMATION_CHOICES = {
    "nuclear": "Nuclear Explosion",
    "boom": "Boom Animation",
    "thanos": "Thanos Snap",
}

COMPLETION_MESSAGES = {
    "nuclear": "Nuclear explosion animation complete! 💥",
    "boom": "Explosion animation complete! 💣",
    "thanos": "Perfectly balanced, as all things should be. 🧤",
}


__all__ = ["NUKE_FRAMES", "ANIMATIONS", "ANIMATION_CHOICES", "COMPLETION_MESSAGES"]
