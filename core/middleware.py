import logging
import time

from django.conf import settings
from django.contrib.auth import logout

logger = logging.getLogger(__name__)

CHAVE_SESSAO_CRIADA_EM = "sessao_criada_em"


def marcar_inicio_sessao(request):
    request.session[CHAVE_SESSAO_CRIADA_EM] = int(time.time())


class SessaoIdadeMaximaMiddleware:
    """
    Encerra a sessão que passou da idade máxima, mesmo que continue sendo renovada.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        usuario = getattr(request, "user", None)
        if usuario is not None and usuario.is_authenticated:
            criada_em = request.session.get(CHAVE_SESSAO_CRIADA_EM)
            if criada_em is None:
                marcar_inicio_sessao(request)
            elif time.time() - criada_em > settings.SESSAO_IDADE_MAXIMA_SEGUNDOS:
                logger.info(f"Sessão expirada por idade máxima: {usuario.username}")
                logout(request)

        return self.get_response(request)
