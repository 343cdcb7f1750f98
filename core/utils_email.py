import logging

from django.conf import settings
from django.core.mail import EmailMessage

logger = logging.getLogger(__name__)


def enviar_correio_simples(assunto, corpo_html, destinatarios):
    """
    Envia um e-mail simples em HTML.

    - assunto: assunto do e-mail
    - corpo_html: conteúdo em HTML
    - destinatarios: string ou lista de e-mails
    """
    if isinstance(destinatarios, str):
        destinatarios = [destinatarios]

    if not destinatarios:
        destinatarios = [settings.DEFAULT_FROM_EMAIL]

    email = EmailMessage(
        subject=assunto,
        body=corpo_html,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=destinatarios,
    )
    email.content_subtype = "html"
    email.extra_headers = {"X-Mailer": "gestao_igreja"}

    email.send()
    logger.info(f"E-mail '{assunto}' enviado para {', '.join(destinatarios)}")
    return True
