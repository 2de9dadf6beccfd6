class RemoteCallError(Exception):
    """
    Fallo de una llamada a la colección remota.

    No distingue entre error de red, timeout, status no-2xx o respuesta
    imposible de parsear.
    """
