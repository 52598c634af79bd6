from typing import Optional


class ErroMealy(ValueError):
    """Erro base da especificação ou da simulação de uma Máquina de Mealy.

    Cada subclasse expõe um ``codigo`` estável, usado pelos chamadores para
    tratar o erro de forma estruturada (ex: destacar a linha com problema).
    """
    codigo = "erro_mealy"
    numero_linha: Optional[int] = None

    @property
    def mensagem(self) -> str:
        return str(self)


class EspecificacaoVazia(ErroMealy):
    """Lista de estados ou cadeia de entrada vazia após remover espaços."""
    codigo = "especificacao_vazia"

    def __init__(self, campo: str):
        self.campo = campo
        super().__init__(f"O campo '{campo}' está vazio!")


class ColunasInsuficientes(ErroMealy):
    """Linha do diagrama com menos colunas que o alfabeto de entrada exige."""
    codigo = "colunas_insuficientes"

    def __init__(self, linha: str, numero_linha: int, esperadas: int, encontradas: int):
        self.linha = linha
        self.numero_linha = numero_linha
        self.esperadas = esperadas
        self.encontradas = encontradas
        super().__init__(
            f"Colunas insuficientes no diagrama de transições (linha {numero_linha}): "
            f"esperadas {esperadas}, encontradas {encontradas}: {linha!r}"
        )


class TransicaoMalformada(ErroMealy):
    """Token de transição sem o separador '/'."""
    codigo = "transicao_malformada"

    def __init__(self, token: str, numero_linha: int, coluna: int):
        self.token = token
        self.numero_linha = numero_linha
        self.coluna = coluna
        super().__init__(
            f"A transição '{token}' (linha {numero_linha}, coluna {coluna}) "
            f"deve estar no formato proximoEstado/saida!"
        )


class EstadoDesconhecido(ErroMealy):
    """A simulação chegou a um estado sem linha no diagrama de transições."""
    codigo = "estado_desconhecido"

    def __init__(self, estado: str, passo: int):
        self.estado = estado
        self.passo = passo
        super().__init__(f"Estado não encontrado no diagrama de transições: {estado} (passo {passo})")


class TransicaoIndefinida(ErroMealy):
    """O par (estado, símbolo) não tem transição definida."""
    codigo = "transicao_indefinida"

    def __init__(self, estado: str, simbolo: str, passo: int):
        self.estado = estado
        self.simbolo = simbolo
        self.passo = passo
        super().__init__(f"A transição para ({estado}, {simbolo}) não está definida! (passo {passo})")
