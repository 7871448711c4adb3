"""tkinter main window: menus, sidebar, status bar and the graph canvas."""

import logging
import os
import queue
import tkinter as tk
from tkinter import filedialog, messagebox

from PIL import ImageTk

from .analysis import AnalysisRunner, list_source_files
from .config import (
    APP_TITLE, APP_VERSION, COLOR_PALETTE, CREATURE_COUNT, CREATURE_TICK_MS, NO_NODES_MESSAGE,
    Settings, load_settings, save_settings,
)
from .export import to_dot_string
from .scene import Line, Polygon, RoundedRect, Text
from .sprites import sprite_pair
from .viewer import GraphViewer, ViewState
from .viewport import grid_lines

log = logging.getLogger("hedgehog_viewer.app")


def rounded_rect_points(x0, y0, x1, y1, r):
    """Polygon outline that tk turns into a rounded box when drawn with smooth=True."""
    return [
        x0 + r, y0, x1 - r, y0, x1, y0, x1, y0 + r,
        x1, y1 - r, x1, y1, x1 - r, y1, x0 + r, y1,
        x0, y1, x0, y1 - r, x0, y0 + r, x0, y0,
    ]


def load_status(state, message, name):
    """Status bar text after opening a DOT file."""
    if state is ViewState.GRAPH:
        return f"Opened {name}"
    if message == NO_NODES_MESSAGE:
        return f"No nodes found in {name}"
    return f"Could not open {name}"


class CanvasPainter:
    """Redraws a GraphViewer's scene onto a tk.Canvas through its viewport."""

    def __init__(self, canvas: tk.Canvas, viewer: GraphViewer):
        self.canvas = canvas
        self.viewer = viewer
        right, left = sprite_pair()
        self.sprite_right = ImageTk.PhotoImage(right)
        self.sprite_left = ImageTk.PhotoImage(left)
        self.show_sprites = True
        # creature id -> canvas image item, rebuilt by every full paint
        self.sprite_items = {}

    def paint(self):
        """Full redraw: grid, graph and sprites."""
        c = self.canvas
        vp = self.viewer.viewport
        c.delete("all")
        self.sprite_items = {}
        self._paint_grid()
        for item in self.viewer.scene.drawables():
            if isinstance(item, Line):
                x1, y1 = vp.to_view(item.x1, item.y1)
                x2, y2 = vp.to_view(item.x2, item.y2)
                c.create_line(x1, y1, x2, y2, fill=item.color,
                              width=max(1, item.width * vp.scale), tags=item.tags)
            elif isinstance(item, Polygon):
                pts = [coord for p in item.points for coord in vp.to_view(*p)]
                c.create_polygon(pts, fill=item.fill, outline=item.outline, tags=item.tags)
            elif isinstance(item, RoundedRect):
                x0, y0 = vp.to_view(item.x, item.y)
                x1, y1 = vp.to_view(item.x + item.w, item.y + item.h)
                c.create_polygon(rounded_rect_points(x0, y0, x1, y1, item.radius * vp.scale),
                                 smooth=True, fill=item.fill, outline=item.outline,
                                 width=item.width, tags=item.tags)
            elif isinstance(item, Text):
                size = int(round(item.size * vp.scale))
                if size < 4:
                    continue
                x, y = vp.to_view(item.x, item.y)
                c.create_text(x, y, text=item.text, fill=item.color, justify="center",
                              font=("Arial", size), tags=item.tags)
        self.move_sprites()

    def move_sprites(self):
        """Reposition only the creature items; everything else stays on the canvas."""
        if not self.show_sprites:
            self.canvas.delete("creature")
            self.sprite_items = {}
            return
        vp = self.viewer.viewport
        for creature in self.viewer.scene.sprites:
            x, y = vp.to_view(creature.x, creature.y)
            img = self.sprite_right if creature.facing_right else self.sprite_left
            item = self.sprite_items.get(creature.id)
            if item is None:
                self.sprite_items[creature.id] = self.canvas.create_image(
                    x, y, anchor="nw", image=img, tags=("creature",))
            else:
                self.canvas.coords(item, x, y)
                self.canvas.itemconfig(item, image=img)

    def _paint_grid(self):
        vp = self.viewer.viewport
        visible = vp.visible_scene_rect()
        if not visible.is_valid():
            return
        vertical, horizontal = grid_lines(visible)
        for x1, y1, x2, y2 in vertical + horizontal:
            a = vp.to_view(x1, y1)
            b = vp.to_view(x2, y2)
            self.canvas.create_line(*a, *b, fill=COLOR_PALETTE["grid"], tags=("grid",))


class HedgehogViewerApp(tk.Tk):
    def __init__(self, settings: Settings = None, show_creatures=None):
        super().__init__()
        self.settings = settings or load_settings()
        if show_creatures is not None:
            self.settings.show_creatures = show_creatures
        self.title(APP_TITLE)
        self.geometry(self.settings.geometry)
        self.minsize(1200, 800)

        self.viewer = GraphViewer()
        self.runner = AnalysisRunner(self.settings.backend_path or None)
        self.results = queue.Queue()
        self.current_folder = ""
        self._drag_from = None
        self._ticking = False

        self._build_menu()
        self._build_toolbar()
        self._build_layout()
        self.painter = CanvasPainter(self.canvas, self.viewer)
        self.viewer.spawn_creatures(CREATURE_COUNT)
        self.show_creatures_var.set(self.settings.show_creatures)
        self.toggle_creatures()

        # --- BINDINGS ---
        self.canvas.bind("<ButtonPress-1>", self.start_pan)
        self.canvas.bind("<B1-Motion>", self.do_pan)
        self.canvas.bind("<MouseWheel>", self.do_zoom)
        self.canvas.bind("<Button-4>", self.do_zoom)  # Linux scroll up
        self.canvas.bind("<Button-5>", self.do_zoom)  # Linux scroll down
        self.canvas.bind("<Configure>", self.on_resize)
        self.bind_all("<Control-o>", lambda e: self.select_folder())
        self.bind_all("<Control-r>", lambda e: self.run_analysis())
        self.protocol("WM_DELETE_WINDOW", self.on_close)

        if self.settings.last_folder and os.path.isdir(self.settings.last_folder):
            self.set_folder(self.settings.last_folder)
        self.after(100, self._drain_results)

    # =================================================================
    #  Window construction
    # =================================================================
    def _build_menu(self):
        menubar = tk.Menu(self)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open Folder...", accelerator="Ctrl+O", command=self.select_folder)
        file_menu.add_command(label="Open DOT File...", command=self.open_dot_file)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_close)
        menubar.add_cascade(label="File", menu=file_menu)

        edit_menu = tk.Menu(menubar, tearoff=0)
        edit_menu.add_command(label="Copy as DOT", command=self.copy_as_dot)
        menubar.add_cascade(label="Edit", menu=edit_menu)

        self.show_creatures_var = tk.BooleanVar(value=True)
        view_menu = tk.Menu(menubar, tearoff=0)
        view_menu.add_command(label="Zoom In", command=lambda: self._after_view(self.viewer.zoom_in))
        view_menu.add_command(label="Zoom Out", command=lambda: self._after_view(self.viewer.zoom_out))
        view_menu.add_command(label="Reset View", command=lambda: self._after_view(self.viewer.reset_view))
        view_menu.add_separator()
        view_menu.add_checkbutton(label="Show Creatures", variable=self.show_creatures_var,
                                  command=self.toggle_creatures)
        menubar.add_cascade(label="View", menu=view_menu)

        analysis_menu = tk.Menu(menubar, tearoff=0)
        analysis_menu.add_command(label="Run Analysis", accelerator="Ctrl+R", command=self.run_analysis)
        analysis_menu.add_command(label="Clear Results", command=self.clear_results)
        menubar.add_cascade(label="Analysis", menu=analysis_menu)

        help_menu = tk.Menu(menubar, tearoff=0)
        help_menu.add_command(label="About Mr. Hedgehog", command=self.show_about)
        menubar.add_cascade(label="Help", menu=help_menu)
        self.config(menu=menubar)

    def _build_toolbar(self):
        self.toolbar = tk.Frame(self, bg="#181825")
        self.toolbar.pack(side="top", fill="x")
        button_opts = {"bg": "#181825", "fg": "#cdd6f4", "relief": "flat", "padx": 12, "pady": 4}
        tk.Button(self.toolbar, text="Open", command=self.select_folder, **button_opts).pack(side="left")
        tk.Button(self.toolbar, text="Analyze", command=self.run_analysis, **button_opts).pack(side="left")
        tk.Button(self.toolbar, text="Clear", command=self.clear_results, **button_opts).pack(side="left")

    def _build_layout(self):
        self.main_split = tk.PanedWindow(self, orient=tk.HORIZONTAL, sashwidth=6, bg="#313244")
        self.main_split.pack(fill="both", expand=True)

        self.sidebar = tk.Frame(self.main_split, width=300, bg="#181825")
        self.canvas = tk.Canvas(self.main_split, bg=COLOR_PALETTE["background"], highlightthickness=0)
        self.main_split.add(self.sidebar, minsize=300, stretch="never")
        self.main_split.add(self.canvas, minsize=10, stretch="always")

        label_opts = {"bg": "#181825", "fg": "#cdd6f4", "font": ("Arial", 10, "bold")}
        tk.Label(self.sidebar, text="Workspace Folder", **label_opts).pack(anchor="w", padx=12, pady=(12, 4))
        path_row = tk.Frame(self.sidebar, bg="#181825")
        path_row.pack(fill="x", padx=12)
        self.folder_entry = tk.Entry(path_row, bg="#313244", fg="#cdd6f4", readonlybackground="#313244")
        self.folder_entry.pack(side="left", fill="x", expand=True)
        self.folder_entry.config(state="readonly")
        tk.Button(path_row, text="Browse", width=8, command=self.select_folder).pack(side="left", padx=(6, 0))

        tk.Label(self.sidebar, text="Actions", **label_opts).pack(anchor="w", padx=12, pady=(12, 4))
        self.analyze_btn = tk.Button(self.sidebar, text="Run Analysis", command=self.run_analysis,
                                     bg="#89b4fa", fg="#1e1e2e", state="disabled")
        self.analyze_btn.pack(fill="x", padx=12, pady=4)
        tk.Button(self.sidebar, text="Clear Results", command=self.clear_results,
                  bg="#f38ba8", fg="#1e1e2e").pack(fill="x", padx=12, pady=4)

        tk.Label(self.sidebar, text="Source Files", **label_opts).pack(anchor="w", padx=12, pady=(12, 4))
        self.file_list = tk.Listbox(self.sidebar, height=20, bg="#1e1e2e", fg="#cdd6f4")
        self.file_list.pack(fill="both", expand=True, padx=12, pady=(0, 12))

        self.status = tk.Label(self, text="Ready - Select a folder to begin", anchor="w",
                               bg="#181825", fg="#a6adc8")
        self.status.pack(side="bottom", fill="x")

    # =================================================================
    #  Folder and analysis
    # =================================================================
    def select_folder(self):
        folder = filedialog.askdirectory(title="Select Rust Project Folder",
                                         initialdir=self.current_folder or os.path.expanduser("~"))
        if folder:
            self.set_folder(folder)

    def set_folder(self, folder):
        self.current_folder = folder
        self.folder_entry.config(state="normal")
        self.folder_entry.delete(0, tk.END)
        self.folder_entry.insert(0, folder)
        self.folder_entry.config(state="readonly")
        self.file_list.delete(0, tk.END)
        files = list_source_files(folder)
        for path in files:
            self.file_list.insert(tk.END, path.name)
        self._update_analyze_button()
        self.set_status(f"Loaded: {folder} ({len(files)} .rs files)")

    def _update_analyze_button(self):
        enabled = bool(self.current_folder) and not self.runner.running
        self.analyze_btn.config(state="normal" if enabled else "disabled")

    def run_analysis(self):
        if not self.current_folder:
            messagebox.showwarning("No Folder Selected", "Please select a Rust project folder first.")
            return
        if self.runner.running:
            return
        self.set_status("Running analysis...")
        self.analyze_btn.config(state="disabled")
        # the callback fires on the worker thread; hand the result to the UI thread
        self.runner.start(self.current_folder, self.results.put)

    def _drain_results(self):
        try:
            while True:
                result = self.results.get_nowait()
                state = self.viewer.handle_analysis_result(result)
                self.set_status("Analysis complete!" if state is ViewState.GRAPH else "Analysis failed")
                self._update_analyze_button()
                self.repaint()
        except queue.Empty:
            pass
        self.after(100, self._drain_results)

    def open_dot_file(self):
        path = filedialog.askopenfilename(filetypes=[("DOT files", "*.dot *.gv"), ("All files", "*.*")])
        if not path:
            return
        self.load_dot_file(path)

    def load_dot_file(self, path):
        state = self.viewer.load_file(path)
        self.set_status(load_status(state, self.viewer.message, os.path.basename(path)))
        self.repaint()

    def clear_results(self):
        self.viewer.clear()
        self.set_status("Results cleared")
        self.repaint()

    def copy_as_dot(self):
        if self.viewer.model is None:
            self.set_status("Nothing to copy")
            return
        self.clipboard_clear()
        self.clipboard_append(to_dot_string(self.viewer.model))
        self.set_status("Copied graph as DOT")

    def show_about(self):
        messagebox.showinfo(
            "About Mr. Hedgehog",
            f"Mr. Hedgehog v{APP_VERSION}\n\nCall graph viewer for Rust workspaces.\n"
            "Scroll to zoom, drag to pan.",
        )

    def set_status(self, text):
        self.status.config(text=text)
        log.info(text)

    # =================================================================
    #  Canvas interaction
    # =================================================================
    def repaint(self):
        self.painter.paint()

    def _after_view(self, action):
        action()
        self.repaint()

    def start_pan(self, event):
        self._drag_from = (event.x, event.y)

    def do_pan(self, event):
        if self._drag_from is None:
            return
        dx, dy = event.x - self._drag_from[0], event.y - self._drag_from[1]
        self._drag_from = (event.x, event.y)
        self.viewer.pan(dx, dy)
        self.repaint()

    def do_zoom(self, event):
        delta = 0
        if getattr(event, "num", 0) == 5 or getattr(event, "delta", 0) < 0:
            delta = -1
        elif getattr(event, "num", 0) == 4 or getattr(event, "delta", 0) > 0:
            delta = 1
        self.viewer.wheel_zoom(delta, (event.x, event.y))
        self.repaint()

    def on_resize(self, event):
        first = self.viewer.viewport.width == 0
        self.viewer.resize(event.width, event.height)
        if first:
            self.viewer.reset_view()
        self.repaint()

    def toggle_creatures(self):
        self.settings.show_creatures = self.show_creatures_var.get()
        self.painter.show_sprites = self.settings.show_creatures
        if self.settings.show_creatures and not self._ticking:
            self._ticking = True
            self.after(CREATURE_TICK_MS, self._tick)
        self.repaint()

    def _tick(self):
        if not self.settings.show_creatures:
            self._ticking = False
            return
        self.viewer.tick()
        self.painter.move_sprites()
        self.after(CREATURE_TICK_MS, self._tick)

    def on_close(self):
        self.settings.last_folder = self.current_folder
        self.settings.geometry = self.geometry()
        try:
            save_settings(self.settings)
        except OSError as e:
            log.warning("Could not save settings: %s", e)
        self.runner.shutdown()
        self.destroy()
