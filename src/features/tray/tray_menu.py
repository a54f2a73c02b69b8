from pydantic import BaseModel

from features.tray.tray_sync import TrayDisplay

STATS_ITEM_ID = "stats"
SHOW_ITEM_ID = "show"
HIDE_ITEM_ID = "hide"
REFRESH_ITEM_ID = "refresh"
QUIT_ITEM_ID = "quit"
SEPARATOR_ID = "separator"


class TrayMenuItem(BaseModel):
    id: str
    label: str = ""
    enabled: bool = True
    is_separator: bool = False


def separator() -> TrayMenuItem:
    return TrayMenuItem(id = SEPARATOR_ID, is_separator = True)


def build_tray_menu(display: TrayDisplay | None) -> list[TrayMenuItem]:
    # the stats row only appears once a snapshot has been synced
    items: list[TrayMenuItem] = []
    if display is not None:
        items.append(TrayMenuItem(id = STATS_ITEM_ID, label = display.menu_label))
        items.append(separator())
    items.extend(
        [
            TrayMenuItem(id = SHOW_ITEM_ID, label = "Show"),
            TrayMenuItem(id = HIDE_ITEM_ID, label = "Hide"),
            TrayMenuItem(id = REFRESH_ITEM_ID, label = "Refresh Now"),
            separator(),
            TrayMenuItem(id = QUIT_ITEM_ID, label = "Quit"),
        ],
    )
    return items
