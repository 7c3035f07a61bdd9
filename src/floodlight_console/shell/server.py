"""SSH server exposing the console."""

import hmac
import os
import socket
import threading
from typing import Optional

import paramiko

from ..config import ConsoleConfig
from ..core.logging import get_logger
from ..exceptions import StartupError
from .factory import ShellFactory

log = get_logger("server")

AUTH_TIMEOUT = 20
HOST_KEY_BITS = 2048


def load_host_key(path: str) -> paramiko.PKey:
    """Load the RSA host key at path, generating and saving one if absent.

    Raises:
        StartupError: if the key cannot be read or written
    """
    try:
        if os.path.exists(path):
            return paramiko.RSAKey(filename=path)
        log.info("Generating new host key at %s", path)
        key = paramiko.RSAKey.generate(HOST_KEY_BITS)
        key.write_private_key_file(path)
        return key
    except (OSError, paramiko.SSHException) as e:
        raise StartupError(f"Cannot load host key {path}: {e}") from e


class _PasswordServer(paramiko.ServerInterface):
    """Password-only authentication for interactive shell channels."""

    def __init__(self, username: str, password: str, peer: str):
        super().__init__()
        self.username = username
        self.password = password
        self.peer = peer
        self.authenticated_user: Optional[str] = None
        self.shell_requested = threading.Event()

    def check_auth_password(self, username: str, password: str) -> int:
        user_ok = hmac.compare_digest(username.encode(), self.username.encode())
        pass_ok = hmac.compare_digest(password.encode(), self.password.encode())
        if user_ok and pass_ok:
            self.authenticated_user = username
            log.info("Authentication succeeded for '%s' from %s", username, self.peer)
            return paramiko.AUTH_SUCCESSFUL
        log.warning("Authentication failed for '%s' from %s", username, self.peer)
        return paramiko.AUTH_FAILED

    def get_allowed_auths(self, username: str) -> str:
        return "password"

    def check_channel_request(self, kind: str, chanid: int) -> int:
        if kind == "session":
            return paramiko.OPEN_SUCCEEDED
        return paramiko.OPEN_FAILED_ADMINISTRATIVELY_PROHIBITED

    def check_channel_pty_request(
        self, channel, term, width, height, pixelwidth, pixelheight, modes
    ) -> bool:
        return True

    def check_channel_shell_request(self, channel) -> bool:
        self.shell_requested.set()
        return True


class ConsoleServer:
    """Accepts SSH connections and runs one session thread per connection.

    Args:
        config: Listen address, port, credentials and host key location
        factory: Creates the session for each authenticated channel
    """

    def __init__(self, config: ConsoleConfig, factory: ShellFactory):
        self.config = config
        self.factory = factory
        self.host_key: Optional[paramiko.PKey] = None
        self._sock: Optional[socket.socket] = None
        self._stopping = threading.Event()

    @property
    def address(self) -> tuple[str, int]:
        if self._sock is None:
            return (self.config.bind_address, self.config.port)
        return self._sock.getsockname()[:2]

    def start(self) -> None:
        """Load the host key and bind the listening socket.

        Raises:
            StartupError: if the key cannot be loaded or the port bound
        """
        self.host_key = load_host_key(self.config.hostkey)
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.config.bind_address, self.config.port))
            sock.listen(100)
        except OSError as e:
            sock.close()
            log.error("Starting console (via SSH) on port %d failed", self.config.port)
            raise StartupError(
                f"Cannot listen on {self.config.bind_address}:{self.config.port}: {e}"
            ) from e
        self._sock = sock
        log.info("Starting console (via SSH) on port %d", self.address[1])

    def serve_forever(self) -> None:
        if self._sock is None:
            self.start()
        try:
            while not self._stopping.is_set():
                try:
                    client, addr = self._sock.accept()
                except OSError:
                    if self._stopping.is_set():
                        break
                    raise
                log.debug("Connection from %s:%d", addr[0], addr[1])
                thread = threading.Thread(
                    target=self._handle_client,
                    args=(client, addr),
                    name=f"console-{addr[0]}:{addr[1]}",
                    daemon=True,
                )
                thread.start()
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        self._stopping.set()
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None
            log.info("Console stopped")

    def _handle_client(self, client: socket.socket, addr: tuple[str, int]) -> None:
        peer = f"{addr[0]}:{addr[1]}"
        transport = paramiko.Transport(client)
        try:
            transport.add_server_key(self.host_key)
            server = _PasswordServer(self.config.username, self.config.password, peer)
            transport.start_server(server=server)

            channel = transport.accept(AUTH_TIMEOUT)
            if channel is None:
                log.info("No channel opened by %s", peer)
                return
            if not server.shell_requested.wait(AUTH_TIMEOUT):
                log.info("No shell requested by %s", peer)
                channel.close()
                return
            self.factory.handle_channel(channel, server.authenticated_user)
        except (paramiko.SSHException, EOFError, OSError) as e:
            log.warning("Connection from %s ended: %s", peer, e)
        finally:
            transport.close()
