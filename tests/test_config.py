"""
Unit tests for gitcontext.config module
"""
import unittest
import tempfile
import os
import shutil
import json
import logging
from pathlib import Path
from unittest.mock import patch

from gitcontext.config import (
    load_config,
    get_config_path,
    get_default_config,
    merge_configs,
    apply_env_overrides,
    read_config_file,
    setup_logging,
)
from gitcontext.errors import ConfigError


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up an isolated HOME and working directory"""
        self.temp_dir = tempfile.mkdtemp()
        self.home_dir = Path(self.temp_dir) / 'home'
        self.work_dir = Path(self.temp_dir) / 'work'
        self.home_dir.mkdir()
        self.work_dir.mkdir()

        self.original_cwd = os.getcwd()
        os.chdir(self.work_dir)

        clean_env = {k: v for k, v in os.environ.items() if not k.startswith('GITCONTEXT_')}
        clean_env['HOME'] = str(self.home_dir)
        self.env_patcher = patch.dict(os.environ, clean_env, clear=True)
        self.env_patcher.start()

    def tearDown(self):
        """Clean up test environment"""
        self.env_patcher.stop()
        os.chdir(self.original_cwd)
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertIn('reader', config)
        self.assertIn('generate', config)
        self.assertIn('logging', config)

        self.assertFalse(config['reader']['strict'])
        self.assertIsNone(config['reader']['directory'])
        self.assertEqual(config['generate']['output'], '_gitcontext.py')
        self.assertEqual(config['logging']['level'], 'WARNING')

    def test_no_config_file(self):
        """Test defaults are used when no file exists"""
        self.assertIsNone(get_config_path())
        self.assertEqual(load_config(), get_default_config())

    def test_user_config_json(self):
        """Test loading ~/.gitcontext/config.json"""
        config_dir = self.home_dir / '.gitcontext'
        config_dir.mkdir()
        (config_dir / 'config.json').write_text(json.dumps({'reader': {'strict': True}}))

        config = load_config()

        self.assertTrue(config['reader']['strict'])
        # Untouched defaults survive the merge
        self.assertIsNone(config['reader']['directory'])
        self.assertEqual(config['generate']['output'], '_gitcontext.py')

    def test_project_config_wins_over_user_config(self):
        """Test .gitcontext.toml in the working directory is preferred"""
        config_dir = self.home_dir / '.gitcontext'
        config_dir.mkdir()
        (config_dir / 'config.json').write_text(json.dumps({'generate': {'output': 'user.py'}}))
        (self.work_dir / '.gitcontext.toml').write_text('[generate]\noutput = "project.py"\n')

        self.assertEqual(get_config_path().resolve(), (self.work_dir / '.gitcontext.toml').resolve())
        self.assertEqual(load_config()['generate']['output'], 'project.py')

    def test_env_config_path(self):
        """Test GITCONTEXT_CONFIG points at an explicit file"""
        config_file = Path(self.temp_dir) / 'custom.yaml'
        config_file.write_text('logging:\n  level: DEBUG\n')
        os.environ['GITCONTEXT_CONFIG'] = str(config_file)

        self.assertEqual(get_config_path(), config_file)
        self.assertEqual(load_config()['logging']['level'], 'DEBUG')

    def test_env_config_path_missing_file(self):
        """Test a missing GITCONTEXT_CONFIG falls through to other locations"""
        os.environ['GITCONTEXT_CONFIG'] = str(Path(self.temp_dir) / 'missing.toml')

        self.assertIsNone(get_config_path())

    def test_explicit_config_path(self):
        """Test load_config with a path argument"""
        config_file = Path(self.temp_dir) / 'explicit.json'
        config_file.write_text(json.dumps({'reader': {'directory': '/src'}}))

        config = load_config(config_file)

        self.assertEqual(config['reader']['directory'], '/src')

    def test_empty_yaml_file(self):
        """Test an empty YAML file yields defaults"""
        config_file = Path(self.temp_dir) / 'empty.yml'
        config_file.write_text('')

        self.assertEqual(read_config_file(config_file), {})

    def test_invalid_json(self):
        """Test parse errors become ConfigError"""
        config_file = Path(self.temp_dir) / 'broken.json'
        config_file.write_text('{not json')

        with self.assertRaises(ConfigError):
            load_config(config_file)

    def test_invalid_toml(self):
        """Test TOML parse errors become ConfigError"""
        config_file = Path(self.temp_dir) / 'broken.toml'
        config_file.write_text('[reader\nstrict = ')

        with self.assertRaises(ConfigError):
            read_config_file(config_file)

    def test_non_mapping_config(self):
        """Test a top-level list is rejected"""
        config_file = Path(self.temp_dir) / 'list.yaml'
        config_file.write_text('- a\n- b\n')

        with self.assertRaises(ConfigError):
            read_config_file(config_file)

    def test_missing_explicit_file(self):
        """Test an explicit path that does not exist"""
        with self.assertRaises(ConfigError):
            load_config(Path(self.temp_dir) / 'nope.json')

    def test_env_overrides(self):
        """Test GITCONTEXT_SECTION_KEY overrides"""
        os.environ['GITCONTEXT_READER_STRICT'] = 'true'
        os.environ['GITCONTEXT_GENERATE_OUTPUT'] = 'build/_ctx.py'
        os.environ['GITCONTEXT_LOGGING_LEVEL'] = 'info'

        config = load_config()

        self.assertIs(config['reader']['strict'], True)
        self.assertEqual(config['generate']['output'], 'build/_ctx.py')
        self.assertEqual(config['logging']['level'], 'info')

    def test_env_override_numeric_path_stays_string(self):
        """Test digit-only values for path settings are not turned into ints"""
        os.environ['GITCONTEXT_READER_DIRECTORY'] = '2024'
        os.environ['GITCONTEXT_GENERATE_OUTPUT'] = '1'

        config = load_config()

        self.assertEqual(config['reader']['directory'], '2024')
        self.assertEqual(config['generate']['output'], '1')

    def test_env_override_boolean_forms(self):
        """Test 1/0 and yes/no set boolean settings"""
        os.environ['GITCONTEXT_READER_STRICT'] = '1'
        self.assertIs(load_config()['reader']['strict'], True)

        os.environ['GITCONTEXT_READER_STRICT'] = 'no'
        self.assertIs(load_config()['reader']['strict'], False)

    def test_env_override_invalid_boolean(self):
        """Test a non-boolean value for a boolean setting"""
        os.environ['GITCONTEXT_READER_STRICT'] = 'sometimes'

        with self.assertRaises(ConfigError):
            load_config()

    def test_env_override_unknown_key_is_ignored(self):
        """Test env variables that match no config key"""
        config = apply_env_overrides(get_default_config())
        os.environ['GITCONTEXT_NOPE_VALUE'] = '1'

        self.assertEqual(apply_env_overrides(get_default_config()), config)


class TestMergeConfigs(unittest.TestCase):
    """Test recursive merging"""

    def test_nested_merge(self):
        base = {'a': {'x': 1, 'y': 2}, 'b': 1}
        override = {'a': {'y': 3}, 'c': 4}

        merged = merge_configs(base, override)

        self.assertEqual(merged, {'a': {'x': 1, 'y': 3}, 'b': 1, 'c': 4})
        self.assertEqual(base['a']['y'], 2)

    def test_scalar_replaces_dict(self):
        self.assertEqual(merge_configs({'a': {'x': 1}}, {'a': None}), {'a': None})


class TestSetupLogging(unittest.TestCase):
    """Test logging configuration"""

    def tearDown(self):
        logging.basicConfig(level=logging.WARNING, force=True)

    def test_sets_root_level(self):
        config = get_default_config()
        config['logging']['level'] = 'debug'

        setup_logging(config)

        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_invalid_level(self):
        config = get_default_config()
        config['logging']['level'] = 'LOUD'

        with self.assertRaises(ConfigError):
            setup_logging(config)


if __name__ == '__main__':
    unittest.main()
