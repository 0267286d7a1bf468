# -*- coding: utf-8 -*-
"""
Display the board in a window.
"""
import numpy as np
from matplotlib import pyplot as plt


class WindowBoard:
    """
    Window to draw the board using Matplotlib.
    Inspired by @Farama-Foundation (Minigrid).
    """

    # ##: Colors, one per doubling of the base value.
    EMPTY_COLOR = "#CDC1B4"
    COLORS = [
        "#EEE4DA",
        "#ECE0C8",
        "#ECB280",
        "#EC8D53",
        "#F57C5F",
        "#E95937",
        "#F3D96B",
        "#F2D04A",
        "#E5BF2E",
        "#E2B814",
        "#EBC502",
        "#00A2D8",
        "#9ED682",
    ]

    def __init__(self, title: str, size: int, base_value: int = 1):
        self.base_value = base_value

        # ## ----> Create support.
        self.fig, self.axe = plt.subplots()
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=1, wspace=0.1, hspace=0.1)
        self.axe.set_facecolor("#BBADA0")
        self.fig.canvas.manager.set_window_title(title)

        self.axe.xaxis.set_ticks_position("none")
        self.axe.yaxis.set_ticks_position("none")
        _ = self.axe.set_xticklabels([])
        _ = self.axe.set_yticklabels([])

        # ## ----> Add cell for board, top row first.
        self.textes = []
        self.axes = [
            self.fig.add_subplot(size, size, r * size + c) for r in range(0, size) for c in range(1, size + 1)
        ]
        for _ax in self.axes:
            text = _ax.text(
                0.5,
                0.5,
                "",
                horizontalalignment="center",
                verticalalignment="center",
                fontsize="x-large",
                fontweight="demibold",
            )
            self.textes.append(text)
            _ = _ax.set_xticks([])
            _ = _ax.set_yticks([])

        # ## ----> Flag indicating that the window was closed.
        self.closed = False

        def close_handler(evt):
            self.closed = True

        self.fig.canvas.mpl_connect("close_event", close_handler)

    def color(self, value: int) -> str:
        """
        Pick the face color of a cell.

        Parameters
        ----------
        value: int
            Tile value, 0 for an empty cell

        Returns
        -------
        str
            Hex color
        """
        if value <= 0:
            return self.EMPTY_COLOR
        doublings = int(np.log2(max(value, self.base_value) / self.base_value))
        return self.COLORS[min(doublings, len(self.COLORS) - 1)]

    def show_image(self, values: np.ndarray):
        """
        Show the board or update the board being shown.

        Parameters
        ----------
        values: np.ndarray
            Tile values indexed [column, row], row 0 at the bottom
        """
        # ## ----> Turn [column, row] into screen order.
        cells = np.reshape(values.T[::-1], -1)
        for _ax, text, value in zip(self.axes, self.textes, cells):
            text.set_text(str(int(value)) if value else "")
            _ax.set_facecolor(self.color(int(value)))

        # ## ---> Request the window to be redrawn
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

        # ## ----> Let Matplotlib process UI events
        plt.pause(0.001)

    def register_key_handler(self, key_handler):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler: Any
            Key handler
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def add_timer(self, interval: int, callback):
        """
        Call ``callback`` every ``interval`` milliseconds while the window is open.

        Parameters
        ----------
        interval: int
            Period in milliseconds
        callback: Any
            Function called without arguments
        """
        timer = self.fig.canvas.new_timer(interval=interval)
        timer.add_callback(callback)
        timer.start()
        return timer

    def show(self, block: bool = True):
        """
        Show the window, and start an event loop.

        Parameters
        ----------
        block: bool
            Activate or not the interactive mode
        """
        # ## ----> If not blocking, trigger interactive mode.
        if not block:
            plt.ion()

        # ## ----> Show the plot.
        plt.show()

    def close(self):
        """
        Close the window.
        """
        plt.close()
        self.closed = True
