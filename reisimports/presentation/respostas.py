# reisimports/presentation/respostas.py
"""
Conversão das exceções da Core em respostas HTTP da API.
"""
import logging

from rest_framework import status
from rest_framework.response import Response

from reisimports.core.exceptions import (
    AcessoNegadoError,
    BaseErroCore,
    FalhaAcessoDadosError,
    ItemNaoEncontradoError,
    LimitePorCpfExcedidoError,
    ValorMinimoNaoAtingidoError,
)

logger = logging.getLogger(__name__)


def resposta_de_erro(erro: BaseErroCore) -> Response:
    """Cada tipo de erro tem seu status; a mensagem é sempre a da exceção."""
    corpo = {'message': str(erro), 'erro': type(erro).__name__}

    if isinstance(erro, ValorMinimoNaoAtingidoError):
        corpo['falta'] = f"{erro.falta:.2f}"
        corpo['valor_minimo'] = f"{erro.valor_minimo:.2f}"
    elif isinstance(erro, LimitePorCpfExcedidoError):
        corpo['disponivel'] = erro.disponivel
        corpo['limite'] = erro.limite

    if isinstance(erro, ItemNaoEncontradoError):
        codigo = status.HTTP_404_NOT_FOUND
    elif isinstance(erro, AcessoNegadoError):
        codigo = status.HTTP_403_FORBIDDEN
    elif isinstance(erro, FalhaAcessoDadosError):
        codigo = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        codigo = status.HTTP_400_BAD_REQUEST

    logger.warning("Requisição recusada (%s): %s", type(erro).__name__, erro)
    return Response(corpo, status=codigo)
