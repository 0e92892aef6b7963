"""FastAPI web application for cadastro-usuarios."""

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Path, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from cadastro_usuarios.database.database import build_engine, build_session_factory, get_db, init_db
from cadastro_usuarios.database.user_repository import StoreError, UserNotFoundError, UserRepository
from cadastro_usuarios.logging_config import setup_logging
from cadastro_usuarios.models.user import INT64_MAX, INT64_MIN, MessageResponse, User, UserFilter, UserIn

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
DELETED_MESSAGE = "Usuário deletado com sucesso!"

router = APIRouter()


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Build a UserRepository bound to the request's session."""
    return UserRepository(db)


INDEX_HTML = """
<!DOCTYPE html>
<html lang="pt-BR">
<head>
    <meta charset="utf-8">
    <title>Cadastro de Usuários</title>
    <style>
        body { font-family: Arial, sans-serif; max-width: 600px; margin: 50px auto; padding: 20px; }
        form { display: flex; flex-direction: column; gap: 10px; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
        input { padding: 8px; }
        button { padding: 10px 20px; cursor: pointer; }
        .card { display: flex; justify-content: space-between; align-items: center; margin: 10px 0; padding: 10px 15px; border: 1px solid #ddd; border-radius: 5px; }
        .card p { margin: 4px 0; }
        #status { color: #b00; min-height: 1em; }
    </style>
</head>
<body>
    <form id="user-form" onsubmit="return false;">
        <h1>Cadastro de Usuários</h1>
        <input placeholder="Nome" name="nome" type="text" id="input-name">
        <input placeholder="Idade" name="idade" type="number" id="input-age">
        <input placeholder="E-mail" name="email" type="email" id="input-email">
        <button type="button" onclick="createUser()">Cadastrar</button>
    </form>
    <div id="status"></div>
    <div id="users"></div>

    <script>
        function showError(message) {
            document.getElementById('status').textContent = message;
        }

        async function describeError(response) {
            try {
                const data = await response.json();
                if (typeof data.detail === 'string') {
                    return data.detail;
                }
                return JSON.stringify(data.detail);
            } catch (error) {
                return response.statusText;
            }
        }

        function renderUsers(users) {
            const list = document.getElementById('users');
            list.innerHTML = '';
            users.forEach(user => {
                const card = document.createElement('div');
                card.className = 'card';
                const info = document.createElement('div');
                [['Nome', user.name], ['Idade', user.age], ['Email', user.email]].forEach(([label, value]) => {
                    const p = document.createElement('p');
                    p.textContent = label + ': ' + value;
                    info.appendChild(p);
                });
                const remove = document.createElement('button');
                remove.textContent = 'Excluir';
                remove.onclick = () => deleteUser(user.id);
                card.appendChild(info);
                card.appendChild(remove);
                list.appendChild(card);
            });
        }

        async function getUsers() {
            try {
                const response = await fetch('/usuarios');
                if (!response.ok) {
                    showError('Error: ' + await describeError(response));
                    return;
                }
                renderUsers(await response.json());
            } catch (error) {
                showError('Error: ' + error.message);
            }
        }

        async function createUser() {
            showError('');
            try {
                const response = await fetch('/usuarios', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({
                        name: document.getElementById('input-name').value,
                        age: document.getElementById('input-age').value,
                        email: document.getElementById('input-email').value,
                    }),
                });
                if (!response.ok) {
                    showError('Error: ' + await describeError(response));
                }
            } catch (error) {
                showError('Error: ' + error.message);
            }
            getUsers();
        }

        async function deleteUser(id) {
            showError('');
            try {
                const response = await fetch('/usuarios/' + id, { method: 'DELETE' });
                if (!response.ok) {
                    showError('Error: ' + await describeError(response));
                }
            } catch (error) {
                showError('Error: ' + error.message);
            }
            getUsers();
        }

        getUsers();
    </script>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def root():
    """Serve the registration form and user list."""
    return INDEX_HTML


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": API_VERSION}


@router.post(
    "/usuarios",
    response_model=UserIn,
    status_code=status.HTTP_201_CREATED,
    summary="Cria um novo usuário",
    tags=["User"],
)
def create_user(user_in: UserIn, repository: UserRepository = Depends(get_user_repository)):
    """Create a user.

    The response echoes the request body; the generated id is not returned.
    """
    try:
        repository.create(user_in)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to create user: {str(e)}")
    return user_in


@router.get(
    "/usuarios",
    response_model=List[User],
    summary="Retorna uma lista de usuários",
    tags=["User"],
)
def list_users(
    name: Optional[str] = Query(None, description="Nome do usuário para filtrar"),
    email: Optional[str] = Query(None, description="Email do usuário para filtrar"),
    age: Optional[int] = Query(None, ge=INT64_MIN, le=INT64_MAX, description="Idade do usuário para filtrar"),
    repository: UserRepository = Depends(get_user_repository),
):
    """List users, narrowed by any supplied exact-match filters."""
    try:
        return repository.find_many(UserFilter(name=name, email=email, age=age))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to list users: {str(e)}")


@router.put(
    "/usuarios/{user_id}",
    response_model=UserIn,
    summary="Atualiza um usuário existente",
    tags=["User"],
)
def update_user(
    user_in: UserIn,
    user_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    repository: UserRepository = Depends(get_user_repository),
):
    """Replace a user's name, email and age. Echoes the request body."""
    try:
        repository.update(user_id, user_in)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to update user: {str(e)}")
    return user_in


@router.delete(
    "/usuarios/{user_id}",
    response_model=MessageResponse,
    summary="Remove um usuário",
    tags=["User"],
)
def delete_user(
    user_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    repository: UserRepository = Depends(get_user_repository),
):
    """Delete a user by ID."""
    try:
        repository.delete(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete user: {str(e)}")
    return MessageResponse(message=DELETED_MESSAGE)


def _cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """Create the FastAPI application around a database engine.

    When no engine is given one is built from DATABASE_URL. The schema is
    created (or migrated) on startup.
    """
    setup_logging()

    if engine is None:
        engine = build_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.engine)
        logger.info(f"Database ready at {app.state.engine.url.render_as_string(hide_password=True)}")
        yield

    app = FastAPI(
        title="Cadastro de Usuários API",
        description="Create, list, update and delete users",
        version=API_VERSION,
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


app = create_app()
