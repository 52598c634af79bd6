import logging
import math
import os
import tkinter as tk, tkinter.ttk as ttk
from tkinter import filedialog, messagebox
from typing import Dict, Optional

from PIL import Image, ImageTk, ImageEnhance

from config.models import Config
from core.maquina_mealy import TABLE_HEADERS, HistoricoSimulacao
from core.simulacao import RequisicaoSimulacao, run_simulation
from gui.diagrama import (STATE_RADIUS, MIN_GAP, arrow_between, arrow_head, build_svg,
                          diagram_width, edge_label, label_position, layout_path)

FONT = ("Helvetica", 11)
MONO_FONT = ("Courier", 11)
DIAGRAM_HEIGHT = 260
ICONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "icons")

logger = logging.getLogger("mealy.gui")


class Tooltip:
    """ Cria um tooltip (dica de ferramenta) para um widget. """
    def __init__(self, widget, text):
        self.widget = widget
        self.text = text
        self.tooltip_window = None
        self.widget.bind("<Enter>", self.show_tooltip, add='+')
        self.widget.bind("<Leave>", self.hide_tooltip, add='+')

    def show_tooltip(self, event):
        if not self.widget.winfo_exists(): return
        x = self.widget.winfo_pointerx() + 15
        y = self.widget.winfo_pointery() + 10

        self.tooltip_window = tw = tk.Toplevel(self.widget)
        tw.wm_overrideredirect(True)
        tw.wm_geometry(f"+{x}+{y}")

        label = tk.Label(tw, text=self.text, justify='left',
                       background="#ffffe0", relief='solid', borderwidth=1,
                       font=("tahoma", "8", "normal"))
        label.pack(ipadx=1)

    def hide_tooltip(self, event=None):
        tw = self.tooltip_window
        self.tooltip_window = None
        if tw:
            try: tw.destroy()
            except tk.TclError: pass


class SimuladorMealyGUI:
    """Janela do simulador: especificação, resultado, diagrama e tabela."""
    def __init__(self, root, config: Optional[Config] = None):
        self.root = root
        self.config = config or Config()
        root.title(self.config.interface.titulo)

        style = ttk.Style()
        style.configure("TButton", padding=(12, 8))
        style.configure("Accent.TButton", padding=(12, 8))
        style.configure("TMenubutton", padding=(12, 8))

        self.icons: Dict[str, ImageTk.PhotoImage] = {}

        # Estado da simulação (pertence à janela, não ao núcleo)
        self.historico: Optional[HistoricoSimulacao] = None
        self.sim_step = 0
        self.sim_playing = False

        self._build_toolbar()
        self._build_statusbar()
        self._build_form()
        self._build_result_area()
        self._build_diagram()
        self._build_table()

        self.canvas.bind("<Configure>", lambda e: self.draw_diagram())
        self.root.bind("<Control-Return>", lambda e: self.cmd_simulate())

    def _build_toolbar(self):
        toolbar = tk.Frame(self.root)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=10, pady=(5, 5))

        export_menu = tk.Menu(toolbar, tearoff=0)
        export_menu.add_command(label="Exportar diagrama para SVG (.svg)", command=self.cmd_export_svg)
        export_menu.add_command(label="Exportar diagrama para PNG (.png)", command=self.cmd_export_png)
        self._create_toolbar_menubutton(toolbar, "exportar", "Exportar", export_menu)

        ttk.Separator(toolbar, orient='vertical').pack(side=tk.LEFT, padx=8, fill='y')

        ttk.Label(toolbar, text="Máquina de Mealy", font=("Helvetica", 11, "bold")).pack(side=tk.RIGHT, padx=10)

    def _create_toolbar_menubutton(self, parent, icon_name, tooltip_text, menu):
        icon_path = os.path.join(ICONS_DIR, f"{icon_name}.png")
        try:
            img = Image.open(icon_path)
            enhancer = ImageEnhance.Color(img)
            img = enhancer.enhance(1.5)
            enhancer = ImageEnhance.Contrast(img)
            img = enhancer.enhance(1.1)
            img = img.resize((32, 32), Image.Resampling.LANCZOS)
            self.icons[icon_name] = ImageTk.PhotoImage(img)
            button = ttk.Menubutton(parent, image=self.icons[icon_name])
        except FileNotFoundError:
            button = ttk.Menubutton(parent, text=tooltip_text)
            logger.debug("Icon not found at '%s', using text label.", icon_path)

        button["menu"] = menu
        button.pack(side=tk.LEFT, padx=2)
        Tooltip(button, tooltip_text)

    def _build_form(self):
        exemplo = self.config.exemplo
        form = ttk.Frame(self.root)
        form.pack(side=tk.TOP, fill=tk.X, padx=10, pady=5)
        form.columnconfigure(1, weight=1)

        def _entry(row, label, value):
            ttk.Label(form, text=label, font=FONT).grid(row=row, column=0, sticky="w", padx=5, pady=4)
            entry = ttk.Entry(form, font=FONT)
            entry.grid(row=row, column=1, sticky="ew", padx=5, pady=4)
            entry.insert(0, value)
            return entry

        self.states_entry = _entry(0, "Estados (separados por vírgula, o primeiro é o inicial):", exemplo.estados)
        self.input_alphabet_entry = _entry(1, "Alfabeto de Entrada (separado por vírgula):", exemplo.alfabeto_entrada)
        self.output_alphabet_entry = _entry(2, "Alfabeto de Saída (separado por vírgula):", exemplo.alfabeto_saida)

        diagram_frame = ttk.LabelFrame(
            form, text="Diagrama de Transições (cada linha: <estado> TAB <proximoEstado/saída> TAB ...)")
        diagram_frame.grid(row=3, column=0, columnspan=2, sticky="ew", padx=5, pady=4)
        self.diagram_text = tk.Text(diagram_frame, height=5, font=MONO_FONT, wrap="none", undo=True)
        self.diagram_text.pack(fill=tk.X, padx=5, pady=5)
        self.diagram_text.insert("1.0", exemplo.diagrama)
        self.diagram_text.tag_configure("erro", background="#fee2e2", foreground="#dc2626")

        self.input_entry = _entry(4, "Cadeia de Entrada:", exemplo.cadeia)

        buttons = ttk.Frame(form)
        buttons.grid(row=5, column=0, columnspan=2, pady=(6, 0))
        ttk.Button(buttons, text="Simular", command=self.cmd_simulate, style="Accent.TButton").pack(side=tk.LEFT, padx=2)
        step_btn = ttk.Button(buttons, text="Passo", command=self.cmd_step)
        step_btn.pack(side=tk.LEFT, padx=2)
        Tooltip(step_btn, "Avança um passo no diagrama")
        ttk.Button(buttons, text="Play/Pausar", command=self.cmd_play_pause).pack(side=tk.LEFT, padx=2)
        ttk.Button(buttons, text="Reiniciar", command=self.cmd_reset_sim).pack(side=tk.LEFT, padx=2)

    def _build_result_area(self):
        frame = ttk.LabelFrame(self.root, text="Resultado da Simulação")
        frame.pack(side=tk.TOP, fill=tk.X, padx=10, pady=5)
        self.result_text = tk.Text(frame, height=3, font=MONO_FONT, wrap="word", state=tk.DISABLED)
        self.result_text.pack(fill=tk.X, padx=5, pady=5)

    def _build_diagram(self):
        frame = ttk.LabelFrame(self.root, text="Diagrama de Transição de Estados")
        frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=10, pady=5)
        self.canvas = tk.Canvas(frame, bg="white", height=DIAGRAM_HEIGHT, highlightthickness=0)
        scroll = ttk.Scrollbar(frame, orient=tk.HORIZONTAL, command=self.canvas.xview)
        self.canvas.configure(xscrollcommand=scroll.set)
        self.canvas.pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        scroll.pack(side=tk.BOTTOM, fill=tk.X)

    def _build_table(self):
        frame = ttk.LabelFrame(self.root, text="Tabela Detalhada de Transições")
        frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=10, pady=5)
        columns = [f"c{i}" for i in range(len(TABLE_HEADERS))]
        self.table = ttk.Treeview(frame, columns=columns, show="headings", height=6)
        for col, header in zip(columns, TABLE_HEADERS):
            self.table.heading(col, text=header)
            self.table.column(col, anchor=tk.CENTER, width=110)
        scroll = ttk.Scrollbar(frame, orient=tk.VERTICAL, command=self.table.yview)
        self.table.configure(yscrollcommand=scroll.set)
        self.table.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        scroll.pack(side=tk.RIGHT, fill=tk.Y)

    def _build_statusbar(self):
        self.status = tk.Label(self.root, text="Pronto", anchor="w", relief=tk.SUNKEN)
        self.status.pack(side=tk.BOTTOM, fill=tk.X)

    def _build_request(self) -> RequisicaoSimulacao:
        simulacao = self.config.simulacao
        return RequisicaoSimulacao(
            estados=self.states_entry.get(),
            alfabeto_entrada=self.input_alphabet_entry.get(),
            alfabeto_saida=self.output_alphabet_entry.get(),
            diagrama=self.diagram_text.get("1.0", "end-1c"),
            cadeia=self.input_entry.get(),
            separador=simulacao.separador_lista,
            delimitador=simulacao.delimitador_colunas,
        )

    def cmd_simulate(self):
        self.sim_playing = False
        self.diagram_text.tag_remove("erro", "1.0", tk.END)
        requisicao = self._build_request()
        resultado = run_simulation(requisicao)

        if not resultado.ok:
            logger.warning("Simulation failed [%s]: %s", resultado.codigo, resultado.mensagem)
            self._clear_results()
            numero_linha = resultado.erro.numero_linha
            if numero_linha is not None:
                self.diagram_text.tag_add("erro", f"{numero_linha}.0", f"{numero_linha}.end")
                self.diagram_text.see(f"{numero_linha}.0")
            self.status.config(text=f"Erro: {resultado.mensagem}")
            messagebox.showerror("Erro", resultado.mensagem, parent=self.root)
            return

        self.historico = resultado.historico
        self.sim_step = len(self.historico.passos)
        logger.info("Simulated '%s': %s -> %s", requisicao.cadeia.strip(),
                    " -> ".join(self.historico.caminho), self.historico.saida)

        self._set_result_text(self.historico.summary())
        self._update_table(self.historico)
        self.canvas.xview_moveto(0)
        self.draw_diagram()
        self.status.config(text=f"Simulação concluída: {len(self.historico.passos)} passo(s), saída '{self.historico.saida}'.")

    def _set_result_text(self, text):
        self.result_text.config(state=tk.NORMAL)
        self.result_text.delete("1.0", tk.END)
        self.result_text.insert("1.0", text)
        self.result_text.config(state=tk.DISABLED)

    def _update_table(self, historico: HistoricoSimulacao):
        self.table.delete(*self.table.get_children())
        for row in historico.table_rows():
            self.table.insert("", tk.END, values=row)

    def _clear_results(self):
        self.historico = None
        self.sim_step = 0
        self._set_result_text("")
        self.table.delete(*self.table.get_children())
        self.draw_diagram()

    def _visible_path_length(self) -> int:
        """Número de estados já revelados pela animação."""
        return self.sim_step + 1

    def draw_diagram(self):
        """Redesenha o caminho percorrido até o passo atual."""
        self.canvas.delete("all")
        if not self.historico:
            return

        try:
            width = self.canvas.winfo_width()
            height = self.canvas.winfo_height()
        except tk.TclError:
            return
        width = width if width > 1 else 600
        height = height if height > 1 else DIAGRAM_HEIGHT

        min_gap = self.config.interface.largura_minima_passo or MIN_GAP
        n = len(self.historico.caminho)
        centers = layout_path(n, width, height, min_gap=min_gap)
        self.canvas.configure(scrollregion=(0, 0, diagram_width(n, width, min_gap=min_gap), height))

        visible = self._visible_path_length()
        for i, passo in enumerate(self.historico.passos[:visible - 1]):
            x1, y1, x2, y2 = arrow_between(centers[i], centers[i + 1])
            is_active = (i + 1 == self.sim_step)
            color = "#16a34a" if is_active else "black"
            self.canvas.create_line(x1, y1, x2, y2, width=3 if is_active else 1.5, fill=color)
            angle = math.atan2(y2 - y1, x2 - x1)
            self.canvas.create_polygon(arrow_head(x2, y2, angle), fill=color)
            lx, ly = label_position(x1, y1, x2, y2)
            self.canvas.create_text(lx, ly, text=edge_label(passo.entrada, passo.saida), font=FONT, fill=color)

        for i, (state, (x, y)) in enumerate(zip(self.historico.caminho[:visible], centers)):
            is_active = (i == self.sim_step)
            fill, outline, lw = ("#e0f2fe", "#0284c7", 3) if is_active else ("#d3d3d3", "black", 1.5)
            self.canvas.create_oval(x - STATE_RADIUS, y - STATE_RADIUS, x + STATE_RADIUS, y + STATE_RADIUS,
                                    fill=fill, outline=outline, width=lw)
            self.canvas.create_text(x, y, text=state, font=FONT)

    def cmd_step(self):
        if not self.historico:
            self.status.config(text="Nenhuma simulação em andamento. Clique em 'Simular'.")
            return

        if self.sim_step < len(self.historico.passos):
            self.sim_step += 1
            passo = self.historico.passos[self.sim_step - 1]
            self.status.config(text=f"Passo {passo.passo}: {passo.estado_anterior} --{passo.entrada}/{passo.saida}--> {passo.novo_estado}")
            self._select_table_row(self.sim_step - 1)
        else:
            self.status.config(text=f"Fim da simulação. Saída final: '{self.historico.saida}'.")
        self.draw_diagram()

    def _select_table_row(self, index):
        children = self.table.get_children()
        if 0 <= index < len(children):
            self.table.selection_set(children[index])
            self.table.see(children[index])

    def cmd_play_pause(self):
        if not self.historico:
            self.status.config(text="Nenhuma simulação em andamento.")
            return

        self.sim_playing = not self.sim_playing
        if self.sim_playing:
            self.status.config(text="Reproduzindo...")
            if self.sim_step >= len(self.historico.passos):
                self.sim_step = 0
                self.draw_diagram()
            self.root.after(self.config.interface.anim_ms, self._playback_step)
        else:
            self.status.config(text="Pausado.")

    def _playback_step(self):
        if not self.sim_playing or not self.historico:
            return
        if self.sim_step < len(self.historico.passos):
            self.cmd_step()
            self.root.after(self.config.interface.anim_ms, self._playback_step)
        else:
            self.sim_playing = False
            self.status.config(text="Reprodução finalizada.")

    def cmd_reset_sim(self):
        self.sim_playing = False
        self.sim_step = 0
        if self.table.selection():
            self.table.selection_remove(*self.table.selection())
        self.status.config(text="Simulação reiniciada. Passo 0 (estado inicial).")
        self.draw_diagram()

    def cmd_export_svg(self):
        if not self.historico:
            messagebox.showinfo("Exportar", "Execute uma simulação antes de exportar o diagrama.", parent=self.root)
            return
        path = filedialog.asksaveasfilename(defaultextension=".svg", filetypes=[("SVG files", "*.svg")])
        if not path: return
        try:
            with open(path, "w", encoding="utf-8") as f: f.write(self._generate_svg_text())
            logger.info("Diagram exported to SVG: %s", path)
            self.status.config(text=f"Exportado para SVG: {path}")
        except OSError as e:
            logger.error("Could not write SVG to %s: %s", path, e)
            messagebox.showerror("Erro ao Exportar SVG", f"Não foi possível salvar o SVG:\n{e}", parent=self.root)

    def cmd_export_png(self):
        if not self.historico:
            messagebox.showinfo("Exportar", "Execute uma simulação antes de exportar o diagrama.", parent=self.root)
            return
        path = filedialog.asksaveasfilename(defaultextension=".png", filetypes=[("PNG files", "*.png")])
        if not path: return
        svg_text = self._generate_svg_text()
        try:
            import cairosvg
        except ImportError:
            messagebox.showwarning("Exportar PNG", "A biblioteca 'cairosvg' não está instalada.\nPara exportar para PNG, instale com: pip install cairosvg", parent=self.root)
            return
        try:
            cairosvg.svg2png(bytestring=svg_text.encode('utf-8'), write_to=path)
            logger.info("Diagram exported to PNG: %s", path)
            self.status.config(text=f"Exportado para PNG: {path}")
        except (OSError, ValueError) as e:
            logger.error("Could not write PNG to %s: %s", path, e)
            messagebox.showerror("Exportar PNG", f"Ocorreu um erro: {e}", parent=self.root)

    def _generate_svg_text(self):
        width = self.canvas.winfo_width() or 600
        height = self.canvas.winfo_height() or DIAGRAM_HEIGHT
        min_gap = self.config.interface.largura_minima_passo or MIN_GAP
        return build_svg(self.historico, width, height, active_step=self.sim_step, min_gap=min_gap)
