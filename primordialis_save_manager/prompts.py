"""
Save selection and naming prompts.

Two front ends with the same interface:
  TkPrompts      - small dark dialogs (default)
  ConsolePrompts - numbered list / input(), for --console or headless use

select()   takes (label, value) pairs and returns a value, or None on cancel.
ask_name() returns the typed name; '' or None means skip.  The validator
returns an error message for a rejected name, or None to accept it.
"""

import tkinter as tk
from typing import Callable, Sequence

Choice    = tuple[str, str]
Validator = Callable[[str], str | None]

# Dark theme colours
C_BG_DARK   = "#0d1117"
C_BG_MID    = "#161b22"
C_BG_LIGHT  = "#21262d"
C_FG_MAIN   = "#c9d1d9"
C_FG_DIM    = "#8b949e"
C_ACCENT    = "#58a6ff"
C_GREEN     = "#3fb950"
C_RED       = "#f85149"


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

class ConsolePrompts:

    def __init__(self, input_fn: Callable[[str], str] | None = None,
                 output_fn: Callable[[str], None] | None = None):
        self._input  = input_fn or input
        self._output = output_fn or print

    def select(self, choices: Sequence[Choice]) -> str | None:
        if not choices:
            return None
        self._output("Select a save to load:")
        for i, (label, _value) in enumerate(choices, start=1):
            self._output(f"  {i:>2}) {label}")

        while True:
            try:
                raw = self._input("Number (empty to quit): ").strip()
            except EOFError:
                return None
            if not raw:
                return None
            if raw.isdigit() and 1 <= int(raw) <= len(choices):
                return choices[int(raw) - 1][1]
            self._output(f"Enter a number between 1 and {len(choices)}.")

    def ask_name(self, validate: Validator) -> str | None:
        while True:
            try:
                raw = self._input("Enter a name for this save (or leave empty to skip): ")
            except EOFError:
                return None
            problem = validate(raw)
            if problem is None:
                return raw.strip()
            self._output(problem)


# ---------------------------------------------------------------------------
# Tk dialogs
# ---------------------------------------------------------------------------

class TkPrompts:
    """
    Modal dialogs on a hidden root window.

    Creating one raises tk.TclError when there is no display; the caller
    falls back to ConsolePrompts.
    """

    def __init__(self):
        self.root = tk.Tk()
        self.root.withdraw()

    def _dialog(self, title: str) -> tk.Toplevel:
        win = tk.Toplevel(self.root)
        win.title(title)
        win.configure(bg=C_BG_DARK)
        win.resizable(False, False)
        win.attributes("-topmost", True)
        return win

    def _centre(self, win: tk.Toplevel):
        win.update_idletasks()
        w, h   = win.winfo_reqwidth(), win.winfo_reqheight()
        sw, sh = win.winfo_screenwidth(), win.winfo_screenheight()
        win.geometry(f"{w}x{h}+{(sw - w) // 2}+{(sh - h) // 2}")

    def _button(self, parent, text, command, fg):
        return tk.Button(
            parent, text=text, command=command,
            bg=C_BG_MID, fg=fg,
            activebackground=C_BG_LIGHT, activeforeground=fg,
            font=("Helvetica", 9), relief=tk.FLAT,
            padx=10, pady=4, cursor="hand2",
        )

    # ------------------------------------------------------------------

    def select(self, choices: Sequence[Choice]) -> str | None:
        if not choices:
            return None
        result: list[str] = []
        win = self._dialog("Primordialis Save Manager")

        tk.Label(win, text="Select a save to load",
                 bg=C_BG_DARK, fg=C_ACCENT,
                 font=("Helvetica", 11, "bold")).pack(anchor=tk.W, padx=12, pady=(12, 6))

        lb_wrap = tk.Frame(win, bg=C_BG_MID, bd=0)
        lb_wrap.pack(fill=tk.BOTH, expand=True, padx=12, pady=4)

        sb = tk.Scrollbar(lb_wrap, bg=C_BG_MID, troughcolor=C_BG_DARK,
                          activebackground=C_ACCENT, relief=tk.FLAT, width=10)
        listbox = tk.Listbox(
            lb_wrap,
            bg=C_BG_MID, fg=C_FG_MAIN,
            selectbackground="#1f6feb", selectforeground=C_FG_MAIN,
            font=("Courier", 9),
            width=56, height=min(max(len(choices), 4), 14),
            yscrollcommand=sb.set,
            relief=tk.FLAT, borderwidth=0,
            highlightthickness=0,
            activestyle="none",
            cursor="hand2",
        )
        sb.config(command=listbox.yview)
        sb.pack(side=tk.RIGHT, fill=tk.Y)
        listbox.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=3, pady=3)

        for label, _value in choices:
            listbox.insert(tk.END, f"  {label}")
        listbox.selection_set(0)
        listbox.itemconfig(0, fg=C_GREEN)   # newest

        def _launch():
            sel = listbox.curselection()
            if sel:
                result.append(choices[sel[0]][1])
                win.destroy()

        btn_row = tk.Frame(win, bg=C_BG_DARK)
        btn_row.pack(fill=tk.X, padx=12, pady=(4, 12))
        self._button(btn_row, "Launch", _launch, C_GREEN).pack(side=tk.LEFT, padx=(0, 6))
        self._button(btn_row, "Quit", win.destroy, C_RED).pack(side=tk.LEFT)

        listbox.bind("<Double-Button-1>", lambda _e: _launch())
        win.bind("<Return>", lambda _e: _launch())
        win.bind("<Escape>", lambda _e: win.destroy())
        win.protocol("WM_DELETE_WINDOW", win.destroy)

        self._centre(win)
        listbox.focus_set()
        win.grab_set()
        self.root.wait_window(win)
        return result[0] if result else None

    def ask_name(self, validate: Validator) -> str | None:
        result: list[str] = []
        win = self._dialog("Save progress")

        tk.Label(win, text="Changes detected in save.",
                 bg=C_BG_DARK, fg=C_ACCENT,
                 font=("Helvetica", 11, "bold")).pack(anchor=tk.W, padx=12, pady=(12, 2))
        tk.Label(win, text="Enter a name for this save (or leave empty to skip):",
                 bg=C_BG_DARK, fg=C_FG_DIM,
                 font=("Helvetica", 8)).pack(anchor=tk.W, padx=12)

        name_var = tk.StringVar()
        entry = tk.Entry(win, textvariable=name_var, width=40,
                         bg=C_BG_MID, fg=C_FG_MAIN, insertbackground=C_FG_MAIN,
                         relief=tk.FLAT, font=("Courier", 10))
        entry.pack(fill=tk.X, padx=12, pady=6)

        error_var = tk.StringVar()
        tk.Label(win, textvariable=error_var,
                 bg=C_BG_DARK, fg=C_RED,
                 font=("Helvetica", 8), anchor=tk.W).pack(fill=tk.X, padx=12)

        def _save():
            value   = name_var.get()
            problem = validate(value)
            if problem:
                error_var.set(problem)
                return
            result.append(value.strip())
            win.destroy()

        btn_row = tk.Frame(win, bg=C_BG_DARK)
        btn_row.pack(fill=tk.X, padx=12, pady=(4, 12))
        self._button(btn_row, "Save", _save, C_GREEN).pack(side=tk.LEFT, padx=(0, 6))
        self._button(btn_row, "Skip", win.destroy, C_FG_DIM).pack(side=tk.LEFT)

        win.bind("<Return>", lambda _e: _save())
        win.bind("<Escape>", lambda _e: win.destroy())
        win.protocol("WM_DELETE_WINDOW", win.destroy)

        self._centre(win)
        entry.focus_set()
        win.grab_set()
        self.root.wait_window(win)
        return result[0] if result else None

    def close(self):
        try:
            self.root.destroy()
        except tk.TclError:
            pass
