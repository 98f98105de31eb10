"""API Description — machine-readable summary served at GET /.

Invariants:
    - Every public endpoint is listed with an absolute example URL
    - categorias_permitidas mirrors Categoria (single source of truth)
"""

from productos_api.core.domain_types import CATEGORIAS_PERMITIDAS
from productos_api.core.links import COLLECTION_PATH


def build_api_documentation(base_url: str, version: str) -> dict:
    """Describe endpoints, categories and status codes. Pure, no IO."""
    collection = f"{base_url}{COLLECTION_PATH}"
    categorias = ", ".join(CATEGORIAS_PERMITIDAS)
    return {
        "mensaje": "Bienvenido a la API REST de Productos",
        "version": version,
        "descripcion": "API RESTful para gestión de productos con PostgreSQL",
        "endpoints": {
            "productos": {
                "GET /productos": {
                    "descripcion": "Obtiene todos los productos con paginación opcional",
                    "parametros": {
                        "limit": "Número máximo de resultados (por defecto: 10, máximo: 100)",
                        "offset": "Número de resultados a omitir (por defecto: 0)",
                        "categoria": f"Filtrar por categoría específica ({categorias})",
                    },
                    "ejemplo": f"{collection}?limit=5&offset=0&categoria=electronica",
                },
                "GET /productos/:id": {
                    "descripcion": "Obtiene un producto específico por su ID",
                    "ejemplo": f"{collection}/1",
                },
                "POST /productos": {
                    "descripcion": "Crea un nuevo producto",
                    "body": {
                        "nombre": "string (requerido)",
                        "precio": "number (requerido, mayor a 0)",
                        "categoria": f"string (requerido) - Valores permitidos: {categorias}",
                        "descripcion": "string (opcional)",
                    },
                    "ejemplo": collection,
                },
                "PUT /productos/:id": {
                    "descripcion": "Actualiza parcialmente un producto existente",
                    "body": "Cualquier subconjunto de nombre, precio, categoria, descripcion",
                    "ejemplo": f"{collection}/1",
                },
                "DELETE /productos/:id": {
                    "descripcion": "Elimina un producto específico",
                    "ejemplo": f"{collection}/1",
                },
                "DELETE /productos/purge": {
                    "descripcion": "Elimina todos los productos (¡CUIDADO!)",
                    "ejemplo": f"{collection}/purge",
                },
            },
        },
        "categorias_permitidas": CATEGORIAS_PERMITIDAS,
        "codigos_estado": {
            "200": "OK - Solicitud exitosa",
            "201": "Created - Recurso creado exitosamente",
            "400": "Bad Request - Solicitud malformada",
            "404": "Not Found - Recurso no encontrado",
            "500": "Internal Server Error - Error del servidor",
        },
        "links": [
            {"rel": "self", "href": base_url},
            {"rel": "productos", "href": collection},
        ],
    }
