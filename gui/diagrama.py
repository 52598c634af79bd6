"""Geometria do diagrama de transições percorridas na simulação.

Os estados do caminho são dispostos da esquerda para a direita, um círculo por
estado visitado, ligados por setas com o rótulo 'entrada / saída'. As funções
daqui não dependem do Tk: o canvas da janela e a exportação SVG usam a mesma
disposição.
"""
import math
from typing import List, Optional, Tuple

from core.maquina_mealy import HistoricoSimulacao

STATE_RADIUS = 20
MARGIN = 50
MIN_GAP = 90
ARROW_SIZE = 6
LABEL_OFFSET = 10

Point = Tuple[float, float]


def layout_path(n: int, width: float, height: float,
                margin: int = MARGIN, min_gap: int = MIN_GAP) -> List[Point]:
    """Centros dos ``n`` círculos, centralizados na vertical.

    O espaçamento ocupa a largura disponível mas nunca fica abaixo de
    ``min_gap``; nesse caso o desenho ultrapassa ``width`` e o canvas rola.
    """
    if n <= 0:
        return []
    gap = (width - 2 * margin) / (n - 1) if n > 1 else 0
    if n > 1:
        gap = max(gap, min_gap)
    y = height / 2
    return [(margin + i * gap, y) for i in range(n)]


def diagram_width(n: int, width: float, margin: int = MARGIN, min_gap: int = MIN_GAP) -> float:
    centers = layout_path(n, width, 0, margin, min_gap)
    if not centers:
        return width
    return max(width, centers[-1][0] + margin)


def arrow_between(p1: Point, p2: Point, r: float = STATE_RADIUS) -> Tuple[float, float, float, float]:
    """Segmento da seta entre dois círculos, começando e terminando nas bordas."""
    angle = math.atan2(p2[1] - p1[1], p2[0] - p1[0])
    x1 = p1[0] + r * math.cos(angle)
    y1 = p1[1] + r * math.sin(angle)
    x2 = p2[0] - r * math.cos(angle)
    y2 = p2[1] - r * math.sin(angle)
    return x1, y1, x2, y2


def arrow_head(x2: float, y2: float, angle: float, size: int = ARROW_SIZE) -> List[Point]:
    """Triângulo da ponta da seta, com o vértice em (x2, y2)."""
    back_x = x2 - size * math.cos(angle)
    back_y = y2 - size * math.sin(angle)
    px, py = -math.sin(angle) * size, math.cos(angle) * size
    return [(x2, y2), (back_x + px, back_y + py), (back_x - px, back_y - py)]


def edge_label(entrada: str, saida: str) -> str:
    return f"{entrada} / {saida}"


def label_position(x1: float, y1: float, x2: float, y2: float) -> Point:
    return (x1 + x2) / 2, (y1 + y2) / 2 - LABEL_OFFSET


def build_svg(historico: HistoricoSimulacao, width: float = 600, height: float = 300,
              active_step: Optional[int] = None, min_gap: int = MIN_GAP) -> str:
    """Gera o SVG do caminho percorrido.

    ``active_step`` destaca o estado alcançado naquele passo (0 = inicial) e a
    seta que levou até ele.
    """
    def esc(t):
        return str(t).replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')

    n = len(historico.caminho)
    total_w = diagram_width(n, width, min_gap=min_gap)
    centers = layout_path(n, width, height, min_gap=min_gap)

    svg = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{total_w:g}" height="{height:g}" '
           f'viewBox="0 0 {total_w:g} {height:g}">']
    svg.append(f'<rect width="{total_w:g}" height="{height:g}" fill="white" />')

    for i, passo in enumerate(historico.passos):
        x1, y1, x2, y2 = arrow_between(centers[i], centers[i + 1])
        angle = math.atan2(y2 - y1, x2 - x1)
        color = "#16a34a" if active_step == i + 1 else "black"
        svg.append(f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" stroke="{color}" stroke-width="1.5" />')
        points = " ".join(f"{x:.1f},{y:.1f}" for x, y in arrow_head(x2, y2, angle))
        svg.append(f'<polygon points="{points}" fill="{color}" />')
        lx, ly = label_position(x1, y1, x2, y2)
        svg.append(f'<text x="{lx:.1f}" y="{ly:.1f}" font-family="Helvetica" font-size="12" '
                   f'text-anchor="middle" fill="{color}">{esc(edge_label(passo.entrada, passo.saida))}</text>')

    for i, (state, (x, y)) in enumerate(zip(historico.caminho, centers)):
        fill, outline = ("#e0f2fe", "#0284c7") if active_step == i else ("#d3d3d3", "black")
        svg.append(f'<circle cx="{x:.1f}" cy="{y:.1f}" r="{STATE_RADIUS}" fill="{fill}" stroke="{outline}" stroke-width="1.5" />')
        svg.append(f'<text x="{x:.1f}" y="{y + 4:.1f}" font-family="Helvetica" font-size="12" '
                   f'text-anchor="middle">{esc(state)}</text>')

    svg.append('</svg>')
    return '\n'.join(svg)
