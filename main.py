from fastapi import FastAPI, WebSocket, WebSocketDisconnect
import uvicorn
import asyncio
import logging
from command import ResponderConfig, ResponderRegistry, TextResponse, register_builtin_responders
from command.models import ChatPayload, ChatPayloadType
from command.router import CommandParser
from pricing import BinanceApiWrapper, PriceSourceConfig

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI()

# Build the responder registry once; read-only afterwards
config = ResponderConfig.from_env()
registry = register_builtin_responders(
    ResponderRegistry(config),
    BinanceApiWrapper(PriceSourceConfig.from_env()),
    config
)
registry.freeze()

# In-memory store for connections and usernames
user_map: dict[WebSocket, str] = {}
current_users: set[str] = set()


@app.get("/")
async def root():
    return {"service": "ticker-chatroom", "responders": registry.names()}


@app.get("/api/help")
async def get_help():
    """Aggregate help text of every registered responder."""
    try:
        return {"success": True, "help": registry.help()}
    except Exception as e:
        logger.error(f"Error building help: {e}")
        return {"success": False, "error": str(e)}


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()
    try:
        while True:
            data = await websocket.receive_text()
            # First message is treated as username if not yet set
            if websocket not in user_map:
                username = data.strip()
                if not username:
                    await send(websocket, ChatPayloadType.ERROR, "Username cannot be empty.")
                    continue
                if username in current_users:
                    await send(websocket, ChatPayloadType.ERROR, "Username already taken. Choose another.")
                    continue
                user_map[websocket] = username
                current_users.add(username)
                await broadcast_user_list()
                await send(websocket, ChatPayloadType.INFO, f"Welcome, {username}!")
            else:
                username = user_map[websocket]
                message = data.strip()
                if message:
                    handled = await handle_command(websocket, username, message)
                    if not handled:
                        await broadcast_message(f"{username}: {message}")
    except WebSocketDisconnect:
        if websocket in user_map:
            username = user_map.pop(websocket)
            current_users.discard(username)
            await broadcast_user_list()
        logger.info("Client disconnected")


async def send(websocket: WebSocket, payload_type: ChatPayloadType, text: str, responder: str | None = None):
    payload = ChatPayload(type=payload_type, text=text, responder=responder)
    await websocket.send_text(payload.to_json())


async def broadcast_user_list():
    payload = ChatPayload(type=ChatPayloadType.USERLIST, users=sorted(current_users)).to_json()
    for ws in list(user_map.keys()):
        await ws.send_text(payload)


async def broadcast_message(message: str):
    payload = ChatPayload(type=ChatPayloadType.MESSAGE, text=message).to_json()
    for ws in list(user_map.keys()):
        await ws.send_text(payload)


async def handle_command(websocket: WebSocket, username: str, message: str) -> bool:
    """
    Route a message through the responder registry.

    Returns:
        True if the message was consumed as a command, False if it is plain chat
    """
    fragments: list[tuple[str, TextResponse]] = []

    def collect(responder_name: str, fragment: TextResponse) -> None:
        fragments.append((responder_name, fragment))

    try:
        # Responders block on price lookups, keep them off the event loop
        matched = await asyncio.to_thread(registry.dispatch, message, collect)
    except Exception as e:
        logger.error(f"Command dispatch error for {username}: {e}", exc_info=True)
        await send(websocket, ChatPayloadType.ERROR, f"Command execution error: {str(e)}")
        return True

    if matched == 0:
        if CommandParser.is_command(message, config.command_prefix):
            await send(
                websocket,
                ChatPayloadType.ERROR,
                f"Unknown command: {message}. Use {config.command_prefix}help for available commands."
            )
            return True
        return False

    logger.info(f"{username} ran '{message}': {matched} responder(s), {len(fragments)} fragment(s)")
    for responder_name, fragment in fragments:
        await send(websocket, ChatPayloadType.INFO, fragment.text, responder=responder_name)
    return True


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
