"""
Tests unitarios para el interprete de comandos de la consola
"""

import socket
import unittest
import os
from unittest.mock import MagicMock

# Import the module to test
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from console.command_interpreter import (
    CommandInterpreter, NoArg, WithArg, WarningAction, PlainMessage,
    matches, matches_strict, parse_command, parse_port_argument, classify_input,
    CONFIRM_EXIT_MESSAGE
)
from console.display import Display, InputSource, InputStyle
from console.transcript import Transcript
from server.errors import MalformedCommandArgument
from server.socket_manager import SocketManager


def get_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as skt:
        skt.bind(("127.0.0.1", 0))
        return skt.getsockname()[1]


class TestMatching(unittest.TestCase):
    """Tests para el matching de prefijo con límite"""

    def test_matches_exact(self):
        self.assertTrue(matches("port", "port"))
        self.assertTrue(matches("clear", "clear"))

    def test_matches_with_argument(self):
        self.assertTrue(matches("port 80", "port"))
        self.assertTrue(matches("port ", "port"))
        self.assertTrue(matches("exit now", "exit"))

    def test_matches_requires_boundary(self):
        """Test que 'porter' y 'port1' no matchean 'port'"""
        self.assertFalse(matches("porter", "port"))
        self.assertFalse(matches("port1", "port"))
        self.assertFalse(matches("por", "port"))
        self.assertFalse(matches(" port", "port"))
        self.assertFalse(matches("", "port"))

    def test_matches_strict(self):
        self.assertTrue(matches_strict("port", "port"))
        self.assertFalse(matches_strict("port ", "port"))
        self.assertFalse(matches_strict("port 80", "port"))


class TestParseCommand(unittest.TestCase):
    """Tests para la clasificación de lineas en comandos"""

    def test_warning_commands(self):
        self.assertEqual(parse_command("shutdown"), WarningAction("shutdown"))
        self.assertEqual(parse_command("exit"), WarningAction("exit"))
        self.assertEqual(parse_command("halt now"), WarningAction("halt"))

    def test_no_arg_commands(self):
        self.assertEqual(parse_command("clear"), NoArg("clear"))
        self.assertEqual(parse_command("reset"), NoArg("reset"))
        self.assertEqual(parse_command("port"), NoArg("port"))

    def test_port_with_argument(self):
        self.assertEqual(parse_command("port 20000"), WithArg("port", 20000))
        self.assertEqual(parse_command("port +80"), WithArg("port", 80))
        self.assertEqual(parse_command("port 1"), WithArg("port", 1))
        self.assertEqual(parse_command("port 65534"), WithArg("port", 65534))

    def test_malformed_port_falls_through(self):
        """Test que un argumento inválido se trata como mensaje plano"""
        for line in ("port ", "port abc", "port 0", "port 65535", "port 70000",
                     "port -1", "port 80 90", "port  80", "port 8_0", "port 1.5"):
            with self.subTest(line=line):
                self.assertEqual(parse_command(line), PlainMessage(line))

    def test_plain_messages(self):
        for line in ("hello", "porter", "clearly", "", "EXIT"):
            with self.subTest(line=line):
                self.assertEqual(parse_command(line), PlainMessage(line))

    def test_parse_port_argument_errors(self):
        with self.assertRaises(MalformedCommandArgument):
            parse_port_argument("")
        with self.assertRaises(MalformedCommandArgument):
            parse_port_argument("65535")
        # Also a ValueError
        with self.assertRaises(ValueError):
            parse_port_argument("abc")


class TestClassifyInput(unittest.TestCase):
    """Tests para el resaltado de la linea de entrada"""

    def test_command_style(self):
        for text in ("clear", "reset", "port", "port 80", "port abc"):
            with self.subTest(text=text):
                self.assertEqual(classify_input(text), InputStyle.COMMAND)

    def test_warning_style(self):
        for text in ("shutdown", "exit", "halt", "exit now"):
            with self.subTest(text=text):
                self.assertEqual(classify_input(text), InputStyle.WARNING)

    def test_neutral_style(self):
        for text in ("", "por", "porter", "hello", "exits"):
            with self.subTest(text=text):
                self.assertEqual(classify_input(text), InputStyle.NEUTRAL)


class TestCommandInterpreter(unittest.TestCase):
    """Tests para la ejecución de comandos"""

    def setUp(self):
        """Setup para cada test"""
        self.sockets = SocketManager(host="127.0.0.1", poll_interval=0.05)
        self.port = self.sockets.bind(0)
        self.transcript = Transcript(clock=lambda: 42)
        self.display = MagicMock(spec=Display)
        self.display.prompt_confirm.return_value = False
        self.input_source = MagicMock(spec=InputSource)
        self.on_shutdown = MagicMock()
        self.interpreter = CommandInterpreter(
            self.sockets, self.transcript,
            display=self.display, input_source=self.input_source,
            on_shutdown=self.on_shutdown
        )

    def tearDown(self):
        """Cleanup después de cada test"""
        self.sockets.close()

    def test_port_query(self):
        response = self.interpreter.process("port")

        self.assertEqual(response, f"Current port: {self.port}")
        self.assertIn(f"[42] Current port: {self.port}\n", self.transcript.content())

    def test_change_port(self):
        """Test que 'port <p>' cambia el puerto y 'port' lo reporta"""
        new_port = get_free_port()

        response = self.interpreter.process(f"port {new_port}")

        self.assertEqual(response, f"Changed port to {new_port}")
        self.assertEqual(self.sockets.current_port, new_port)
        self.assertIn(f"Changed port to {new_port}", self.transcript.content())
        self.assertEqual(self.interpreter.process("port"), f"Current port: {new_port}")

    def test_change_to_same_port(self):
        response = self.interpreter.process(f"port {self.port}")

        self.assertEqual(response, f"Changed port to {self.port}")
        self.assertTrue(self.sockets.is_bound)
        self.assertEqual(self.sockets.current_port, self.port)

    def test_change_port_in_use(self):
        """Test que un puerto ocupado deja el binding anterior intacto"""
        blocker = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        blocker.bind(("127.0.0.1", 0))
        busy_port = blocker.getsockname()[1]

        try:
            response = self.interpreter.process(f"port {busy_port}")
        finally:
            blocker.close()

        self.assertEqual(response, f"[ERROR] Failed to change port to {busy_port}: already in use")
        self.assertEqual(self.sockets.current_port, self.port)
        self.assertTrue(self.sockets.is_bound)
        self.assertIn(f"[ERROR] Port {busy_port} already in use", self.transcript.content())

        # The old socket still receives
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sender:
            sender.sendto(b"still here", ("127.0.0.1", self.port))
        self.assertEqual(self.sockets.receive().payload, b"still here")

    def test_malformed_port_is_plain_message(self):
        """Test que 'port ' con argumento vacío se responde como entrada inválida"""
        response = self.interpreter.process("port ")

        self.assertEqual(response, "No command issued; invalid input: port ")
        self.assertIn("[SERVER] port \n", self.transcript.content())
        self.assertEqual(self.sockets.current_port, self.port)

    def test_out_of_range_port_is_plain_message(self):
        response = self.interpreter.process("port 65535")

        self.assertEqual(response, "No command issued; invalid input: port 65535")
        self.assertEqual(self.sockets.current_port, self.port)

    def test_plain_message(self):
        response = self.interpreter.process("porter")

        self.assertEqual(response, "No command issued; invalid input: porter")
        self.assertEqual(self.transcript.content(), "[42] [SERVER] porter\n")

    def test_clear_and_reset(self):
        """Test que clear oculta y reset restaura el transcript"""
        self.transcript.append("before")

        self.assertEqual(self.interpreter.process("clear"), "Cleared console display")
        self.assertEqual(self.transcript.visible_content(), "")

        self.transcript.append("after")
        self.assertEqual(self.interpreter.process("reset"), "Restored console display")
        self.assertEqual(self.transcript.visible_content(), "[42] before\n[42] after\n")

    def test_clear_with_trailing_text(self):
        self.transcript.append("before")

        self.assertEqual(self.interpreter.process("clear everything"), "Cleared console display")
        self.assertEqual(self.transcript.visible_content(), "")

    def test_unconfirmed_exit(self):
        """Test que 'exit' sin confirmar no cambia nada ni escribe en el transcript"""
        length_before = len(self.transcript)

        response = self.interpreter.process("exit")

        self.display.prompt_confirm.assert_called_once_with(CONFIRM_EXIT_MESSAGE)
        self.on_shutdown.assert_not_called()
        self.assertEqual(response, "No command issued; invalid input: exit")
        self.assertEqual(len(self.transcript), length_before)
        self.assertTrue(self.sockets.is_bound)

    def test_unconfirmed_shutdown_reports_whole_line(self):
        length_before = len(self.transcript)

        self.assertEqual(self.interpreter.process("halt now"), "No command issued; invalid input: halt now")
        self.assertEqual(self.interpreter.execute(WarningAction("shutdown")),
                         "No command issued; invalid input: shutdown")
        self.assertEqual(len(self.transcript), length_before)

    def test_confirmed_shutdown(self):
        self.display.prompt_confirm.return_value = True

        for line in ("shutdown", "halt", "exit"):
            with self.subTest(line=line):
                self.on_shutdown.reset_mock()
                response = self.interpreter.process(line)

                self.assertEqual(response, "Shutting down server")
                self.on_shutdown.assert_called_once_with()

    def test_input_cleared_and_display_refreshed(self):
        """Test que la entrada se limpia después de cada linea, sea cual sea el resultado"""
        for line in ("hello", "clear", "port", "port abc", "exit"):
            self.interpreter.process(line)

        self.assertEqual(self.input_source.clear.call_count, 5)
        self.assertEqual(self.display.show_text.call_count, 5)
        self.display.show_text.assert_called_with(self.transcript.visible_content())

    def test_input_cleared_on_error(self):
        self.display.prompt_confirm.side_effect = RuntimeError("dialog closed")

        with self.assertRaises(RuntimeError):
            self.interpreter.process("exit")

        self.input_source.clear.assert_called_once_with()

    def test_execute_unsupported_command(self):
        with self.assertRaises(ValueError):
            self.interpreter.execute(WithArg("clear", 5))

    def test_interpreter_without_collaborators(self):
        """Test que sin display la confirmación de salida se rechaza"""
        interpreter = CommandInterpreter(self.sockets, self.transcript)

        self.assertEqual(interpreter.process("exit"), "No command issued; invalid input: exit")
        self.assertEqual(interpreter.process("clear"), "Cleared console display")


if __name__ == '__main__':
    unittest.main()
