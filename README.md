# snipframe

A full-screen screenshot tool for the desktop. When it starts, it captures the
screen with Pillow's `ImageGrab` and shows the capture in a full-screen pygame
window. You drag out a region on top of it. Then you copy that region to the
clipboard or save it to a file.

## Installation

```
pip install snipframe
```

## Usage

```
snipframe
```

Pass `--instant` to copy the first selection to the clipboard as soon as you
release the left mouse button:

```
snipframe --instant
```

`snipframe --version` prints the version.

### Controls

| Input           | Action                                      |
|-----------------|---------------------------------------------|
| Mouse           | Select the screenshot area                  |
| Ctrl + S        | Save the screenshot to a file               |
| Enter, Ctrl + C | Copy the screenshot to the clipboard        |
| Right click     | Snap the closest corner to the mouse        |
| Shift + Mouse   | Resize or move the area slowly              |
| F11, Middle     | Select the entire screen                    |
| Esc             | Exit                                        |

- Drag a side or a corner of the selection to resize it.
- Drag from inside the selection to move it.
- The width and the height appear next to the bottom-right corner.
- While the selection is idle, buttons around it repeat the main actions: select all, copy, save and exit. Each button shows a tooltip.
- Errors, such as copying with no selection, appear in the top-right corner for five seconds.

### Copying and saving

Copying writes the region to the clipboard as a PNG and tries to show a
desktop notification. The window then closes. Copying uses these tools:

- Linux: `wl-copy` under Wayland, otherwise `xclip`. A background process
  (`python -m snipframe.clipboard`) keeps serving the image until something
  else is copied.
- macOS: `osascript`.
- Windows: PowerShell.

Saving closes the window and then opens a Tk file dialog. If you close the
dialog without choosing a path, nothing is saved.

## Using it as a library

The geometry and the selection logic are plain Python and need no display:

```python
from snipframe.geometry import Point
from snipframe.selection import Selection

sel = Selection.at(Point(10, 10)).with_width(lambda w: w - 50).norm()
print(sel.pos(), sel.size())
```

The modules are:

- `snipframe.app.App` holds the application state. `App.update` applies a message from `snipframe.message` to that state and returns a `Command`.
- `snipframe.events.handle_event` turns mouse and keyboard events into those messages.
- `snipframe.events.mouse_interaction` picks the cursor shape.
- `snipframe.icon_layout.layout_icons` computes where the buttons go around a selection.
- `snipframe.render.shade_rects` gives the areas that are darkened outside the selection.

## Limitations

- The window captures the whole screen as Pillow's `ImageGrab.grab()` returns it. It does not pick a single monitor.
- You cannot type into the size indicator. It only displays the size. `snipframe.icon_layout.parse_dimension` and the `ResizeHorizontally` / `ResizeVertically` messages are there for callers that want to set the size themselves.
- There are no drawing tools. The `Icon` enum lists pen, shape and text icons, but no button uses them.
- Saving needs `tkinter`. Without it, the image is not saved.

## Development

```
pip install -e ".[test]"
pytest
```