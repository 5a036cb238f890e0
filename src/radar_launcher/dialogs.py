import customtkinter as ctk
from tkinter import messagebox

from radar_launcher.models import Config
from radar_launcher.storage import ConfigRegistry
from radar_launcher.utils import copy_to_clipboard


class SettingsDialog:
    def __init__(self, parent, registry: ConfigRegistry, config: Config):
        self.registry = registry
        self.config = config
        self.result = False

        self.dialog = ctk.CTkToplevel(parent)
        self.dialog.title("Settings")
        self.dialog.geometry("400x340")
        self.dialog.transient(parent)
        self.dialog.grab_set()

        main_frame = ctk.CTkFrame(self.dialog)
        main_frame.pack(fill="both", expand=True, padx=20, pady=20)

        self.logging_var = ctk.BooleanVar(value=config.logging)
        ctk.CTkCheckBox(main_frame, text="Write diagnostic log (log.txt)", variable=self.logging_var).grid(
            row=0, column=0, columnspan=2, padx=5, pady=5, sticky="w")
        self.show_loot_var = ctk.BooleanVar(value=config.show_loot)
        ctk.CTkCheckBox(main_frame, text="Show loot", variable=self.show_loot_var).grid(
            row=1, column=0, columnspan=2, padx=5, pady=5, sticky="w")

        self.entries = {}
        fields = [
            ("UI scale (%)", "ui_scale"),
            ("Font size", "font_size"),
            ("Max distance", "max_distance"),
        ]
        for i, (label, key) in enumerate(fields, start=2):
            ctk.CTkLabel(main_frame, text=label).grid(row=i, column=0, padx=5, pady=5, sticky="w")
            entry = ctk.CTkEntry(main_frame, width=100)
            entry.insert(0, str(getattr(config, key)))
            entry.grid(row=i, column=1, padx=5, pady=5, sticky="w")
            self.entries[key] = entry

        button_frame = ctk.CTkFrame(main_frame)
        button_frame.grid(row=len(fields) + 2, column=0, columnspan=2, pady=20)
        ctk.CTkButton(button_frame, text="Save", command=self.save, width=100).pack(side="left", padx=5)
        ctk.CTkButton(button_frame, text="Cancel", command=self.dialog.destroy, width=100).pack(side="left", padx=5)

    def save(self):
        try:
            self.registry.save_config_changes(self.config, {
                "logging": self.logging_var.get(),
                "show_loot": self.show_loot_var.get(),
                **{key: int(entry.get()) for key, entry in self.entries.items()},
            })
            self.result = True
            self.dialog.destroy()
        except Exception as e:
            messagebox.showerror("Error", str(e))


def show_fatal_error(title: str, message: str, details: str) -> None:
    """Blocking error window shown before the process exits."""
    window = ctk.CTk()
    window.title(title)
    window.geometry("600x400")

    ctk.CTkLabel(window, text=message, wraplength=560).pack(pady=10)

    text_widget = ctk.CTkTextbox(window, width=550, height=250)
    text_widget.pack(pady=10, padx=10, fill="both", expand=True)
    text_widget.insert("1.0", details)
    text_widget.configure(state="disabled")

    button_frame = ctk.CTkFrame(window)
    button_frame.pack(pady=10)
    ctk.CTkButton(button_frame, text="Copy Details", command=lambda: copy_to_clipboard(window, details)).pack(side="left", padx=5)
    ctk.CTkButton(button_frame, text="Close", command=window.destroy).pack(side="left", padx=5)

    window.mainloop()
