from functools import wraps

from django.http import JsonResponse

from .services import papel_do_usuario


def papel_requerido(*papeis):
    """
    Restringe a view aos papéis informados. Admin sempre passa.
    Usar depois de @login_required.
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            papel = papel_do_usuario(request.user)
            if papel != "admin" and papel not in papeis:
                return JsonResponse(
                    {"ok": False, "error": "Você não tem permissão para esta operação."},
                    status=403,
                )
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator
