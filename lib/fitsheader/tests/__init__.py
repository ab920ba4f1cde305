import os
import shutil
import stat
import tempfile
import warnings

from fitsheader import core


class FitsHeaderTestCase(object):
    def setup_method(self, method):
        self.data_dir = os.path.join(os.path.dirname(__file__), 'data')
        self.temp_dir = tempfile.mkdtemp(prefix='fitsheader-test-')

        # Restore global settings to defaults
        core.restore_defaults()

        warnings.resetwarnings()
        warnings.simplefilter('ignore', DeprecationWarning)
        warnings.simplefilter('always', UserWarning)

    def teardown_method(self, method):
        shutil.rmtree(self.temp_dir)
        core.restore_defaults()

    def copy_file(self, filename):
        """Copies a backup of a test data file to the temp dir and sets its
        mode to writeable.
        """

        shutil.copy(self.data(filename), self.temp(filename))
        os.chmod(self.temp(filename), stat.S_IREAD | stat.S_IWRITE)

    def data(self, filename):
        """Returns the path to a test data file."""

        return os.path.join(self.data_dir, filename)

    def temp(self, filename):
        """ Returns the full path to a file in the test temp dir."""

        return os.path.join(self.temp_dir, filename)
