import os
import customtkinter as ctk
from tkinter import ttk, messagebox

from radar_launcher.models import AppContext
from radar_launcher.storage import ConfigRegistry
from radar_launcher.utils import APP_NAME, APP_VERSION, get_log_file_path
from radar_launcher.dialogs import SettingsDialog


class RadarHostApp:
    def __init__(self, context: AppContext, logger):
        self.context = context
        self.logger = logger
        self.registry = ConfigRegistry(context.app_root, logger)

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")
        ctk.set_widget_scaling(context.config.ui_scale / 100)

        self.root = ctk.CTk()
        self.root.title(f"{APP_NAME} v{APP_VERSION}")
        self.root.geometry("900x420")

        self.setup_ui()
        self.refresh()

    def setup_ui(self):
        main_frame = ctk.CTkFrame(self.root)
        main_frame.pack(fill="both", expand=True, padx=10, pady=10)

        buttons_frame = ctk.CTkFrame(main_frame)
        buttons_frame.pack(fill="x", padx=10, pady=(10, 5))
        ctk.CTkButton(buttons_frame, text="Settings", command=self.settings, width=100).grid(row=0, column=0, padx=5, pady=5)

        table_frame = ctk.CTkFrame(main_frame)
        table_frame.pack(fill="both", expand=True, padx=10, pady=5)

        columns = ("Resource", "File", "Summary")
        self.tree = ttk.Treeview(table_frame, columns=columns, show="headings", height=6)
        for col in columns:
            self.tree.heading(col, text=col)
        self.tree.column("Resource", width=160, minwidth=100)
        self.tree.column("File", width=380, minwidth=150)
        self.tree.column("Summary", width=280, minwidth=120)
        self.tree.grid(row=0, column=0, sticky="nsew")
        table_frame.grid_rowconfigure(0, weight=1)
        table_frame.grid_columnconfigure(0, weight=1)

        self.status_label = ctk.CTkLabel(main_frame, text="", height=30)
        self.status_label.pack(fill="x", padx=10, pady=(5, 10))

    def refresh(self):
        for row in self.tree.get_children():
            self.tree.delete(row)

        ctx = self.context
        rows = [
            (ctx.config, f"logging={'on' if ctx.config.logging else 'off'}, scale={ctx.config.ui_scale}%"),
            (ctx.loot_filters, f"{len(ctx.loot_filters.filters)} filter(s), selected: {ctx.loot_filters.selected}"),
            (ctx.watchlist, f"{len(ctx.watchlist.profiles)} profile(s), {ctx.watchlist.entry_count()} entries"),
            (ctx.ai_factions, f"{len(ctx.ai_factions.factions)} faction(s)"),
        ]
        for resource, summary in rows:
            self.tree.insert("", "end", values=(
                type(resource).__name__,
                self.registry.path_for(type(resource)),
                summary,
            ))

        if ctx.log.is_open:
            log_status = f"Logging to {get_log_file_path(ctx.app_root)}"
        else:
            log_status = "Logging disabled"
        self.status_label.configure(text=f"{log_status} | Data: {os.path.abspath(ctx.app_root)}")

    def settings(self):
        dialog = SettingsDialog(self.root, self.registry, self.context.config)
        self.root.wait_window(dialog.dialog)
        if dialog.result:
            self.context.log.log("Settings saved")
            messagebox.showinfo("Settings", "Settings saved. Logging changes apply on next start.")

    def run(self):
        self.root.mainloop()


def run_ui(context: AppContext, logger):
    app = RadarHostApp(context, logger)
    app.run()
