"""REST transport: FastAPI routers, schemas and error mapping."""
