"""
Integration tests for xlog

Tests end-to-end scenarios combining multiple components:
- Entry points + default writer + rotation
- Multi-threaded logging through call-site streams
"""

import shutil
import tempfile
import threading
import unittest
from io import StringIO
from pathlib import Path

import xlog
from xlog.levels import LogLevel
from xlog.writer import LogWriter


class TestEndToEndLogging(unittest.TestCase):
    """Test complete end-to-end logging scenarios"""

    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.log_dir = Path(self.temp_dir) / "logs"
        self.console = StringIO()
        xlog.reset()
        self.writer = xlog.set_writer(LogWriter(console=self.console))
        self.writer.initialize(str(self.log_dir), "app", 100)
        self.writer.set_level(LogLevel.INFO)

    def tearDown(self):
        """Clean up"""
        xlog.reset()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def log_lines(self):
        lines = []
        for index in range(self.writer.file_index):
            path = self.log_dir / f"app.{index}.log"
            lines.extend(path.read_text(encoding="utf-8").splitlines())
        return lines

    def test_filtered_then_accepted(self):
        """Test DEBUG is dropped and INFO reaches file and console"""
        with xlog.debug() as line:
            line << "x"
        self.assertEqual(self.console.getvalue(), "")

        with xlog.info() as line:
            line << "hello"

        content = (self.log_dir / "app.0.log").read_text(encoding="utf-8")
        self.assertEqual(len(content.splitlines()), 1)
        self.assertTrue(content.endswith("| hello\n"))
        self.assertIn("[ INFO  ] test_integration.py : ", content)
        self.assertEqual(content, self.console.getvalue())

    def test_rotation_to_next_file(self):
        """Test the line after the threshold is crossed lands in app.1.log"""
        count = 0
        while self.writer.file_index == 1:
            with xlog.info() as line:
                line << "message " << count
            count += 1

        with xlog.info() as line:
            line << "next"

        first = (self.log_dir / "app.0.log").read_bytes()
        last_line = first.splitlines(keepends=True)[-1]
        self.assertGreater(len(first), 100)
        self.assertLessEqual(len(first) - len(last_line), 100)
        self.assertTrue((self.log_dir / "app.1.log").read_text(encoding="utf-8").endswith("| next\n"))

    def test_two_workers(self):
        """Test two threads with 50 messages each give 100 complete lines"""

        def worker(worker_id):
            for i in range(50):
                with xlog.info() as line:
                    line << "worker " << worker_id << " count " << i

        threads = [threading.Thread(target=worker, args=(n,)) for n in (1, 2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = self.log_lines()
        self.assertEqual(len(lines), 100)
        self.assertEqual(len(self.console.getvalue().splitlines()), 100)

        for worker_id in (1, 2):
            own = [line.split(" | ", 1)[1] for line in lines if f"| worker {worker_id} " in line]
            self.assertEqual(own, [f"worker {worker_id} count {i}" for i in range(50)])

    def test_append_chain(self):
        """Test chained appends produce one line"""
        with xlog.info() as line:
            line.append("worker ").append(1).append(" count ").append(3)

        self.assertTrue(self.console.getvalue().endswith("| worker 1 count 3\n"))
        self.assertEqual(len(self.console.getvalue().splitlines()), 1)

    def test_exception_still_logged(self):
        """Test a stream is committed when its block raises"""
        with self.assertRaises(KeyError):
            with xlog.error() as line:
                line << "lookup of " << "missing"
                {}["missing"]

        self.assertIn("[ ERROR ] test_integration.py : ", self.console.getvalue())
        self.assertIn("| lookup of missing\n", self.console.getvalue())

    def test_threshold_change(self):
        """Test raising the threshold at runtime"""
        xlog.warn("first").commit()
        self.writer.set_level("ERROR")
        xlog.warn("second").commit()
        xlog.fatal("third").commit()

        messages = [line.split(" | ", 1)[1] for line in self.log_lines()]
        self.assertEqual(messages, ["first", "third"])


if __name__ == "__main__":
    unittest.main()
