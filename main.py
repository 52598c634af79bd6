import argparse
import ctypes
import logging
import os
import sys
from pathlib import Path

import cli
from config.loader import load_config
from infra.exceptions import install_exception_hook
from infra.logging import configure_logging

logger = logging.getLogger("mealy.main")

ICON_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "icons", "icon.ico")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulador de Máquinas de Mealy.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Caminho para o arquivo de configuração YAML/JSON.",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Executa a simulação no terminal, sem abrir a janela.",
    )
    cli.add_arguments(parser)
    return parser.parse_args(argv)


def load_icon(root):
    """Carrega o ícone da janela, se existir."""
    from PIL import Image, ImageTk

    if not os.path.exists(ICON_PATH):
        return None
    try:
        image = Image.open(ICON_PATH)
        icon_img = ImageTk.PhotoImage(image.resize((32, 32), Image.Resampling.LANCZOS))
        root.iconphoto(False, icon_img)
        return icon_img
    except OSError as e:
        logger.warning("Não foi possível carregar o ícone: %s", e)
        return None


def run_gui(config):
    import tkinter as tk
    import sv_ttk

    from gui.gui_mealy import SimuladorMealyGUI

    root = tk.Tk()

    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    install_exception_hook(root)
    sv_ttk.set_theme(config.interface.tema)
    root.geometry("1000x850")
    root.icon_image = load_icon(root)

    SimuladorMealyGUI(root, config)
    logger.info("Window opened (theme=%s)", config.interface.tema)
    root.mainloop()


def main(argv=None):
    args = parse_args(argv)
    config = load_config(args.config)

    if args.cli:
        configure_logging(config.logging, console=False)
        install_exception_hook(show_dialog=False)
        return cli.run(args, config)

    configure_logging(config.logging)
    run_gui(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
