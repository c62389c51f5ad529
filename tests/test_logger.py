import io
import logging
import unittest

from mongo_dataimport.utils.logger import setup_logger


class TestSetupLogger(unittest.TestCase):

    def setUp(self):
        self.name = f"mongo_dataimport.tests.{self.id()}"
        self.addCleanup(logging.getLogger(self.name).handlers.clear)

    def test_writes_to_given_stream(self):
        stream = io.StringIO()
        logger = setup_logger(self.name, stream=stream)

        logger.info("Import finished")

        self.assertIn(f"{self.name} - INFO - Import finished", stream.getvalue())

    def test_repeated_setup_adds_one_handler(self):
        setup_logger(self.name, stream=io.StringIO())
        logger = setup_logger(self.name, stream=io.StringIO())

        self.assertEqual(len(logger.handlers), 1)

    def test_root_handlers_do_not_block_setup(self):
        root_handler = logging.NullHandler()
        logging.getLogger().addHandler(root_handler)
        self.addCleanup(logging.getLogger().removeHandler, root_handler)

        logger = setup_logger(self.name, stream=io.StringIO())

        self.assertEqual(len(logger.handlers), 1)


if __name__ == '__main__':
    unittest.main()
