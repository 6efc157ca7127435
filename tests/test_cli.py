"""Tests for the command-line interface."""

import json
import os

import pytest
import pandas as pd

from moldesc.cli import build_node, create_parser, main, read_table
from moldesc.core.exceptions import ConfigurationError, DescriptorNotFoundError
from moldesc.descriptors.whim import WhimScheme
from moldesc.nodes import HBondAcceptorNode, WhimNode


def _write_smiles(temp_dir, lines, name='molecules.smi'):
    path = os.path.join(temp_dir, name)
    with open(path, 'w') as f:
        f.write("\n".join(lines) + "\n")
    return path


class TestParser:
    """Test argument parsing."""

    def test_calculate_defaults(self):
        args = create_parser().parse_args(['calculate', 'whim', '-i', 'in.smi'])
        assert args.descriptor == 'whim'
        assert args.output == '-'
        assert args.format == 'csv'
        assert args.column is None

    def test_requires_input(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['calculate', 'whim'])

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestBuildNode:
    """Test node construction from options."""

    def test_hbond_acceptor_node(self):
        node = build_node({'descriptor_name': 'nHBAcc', 'handle_errors': 'skip'}, 'smiles')
        assert isinstance(node, HBondAcceptorNode)
        assert node.settings.mol_column_name == 'smiles'
        assert node.settings.handle_errors == 'skip'

    def test_whim_scheme_selection(self):
        node = build_node({'descriptor_name': 'whim', 'scheme': 'mass', 'random_seed': 5})
        assert isinstance(node, WhimNode)
        assert node.settings.enabled_schemes() == [WhimScheme.ATOMIC_MASSES]
        assert node.settings.random_seed == 5

    def test_missing_descriptor(self):
        with pytest.raises(ConfigurationError):
            build_node({})

    def test_unknown_descriptor(self):
        with pytest.raises(DescriptorNotFoundError):
            build_node({'descriptor_name': 'maccs'})

    def test_unknown_scheme(self):
        with pytest.raises(ConfigurationError, match="scheme"):
            build_node({'descriptor_name': 'whim', 'scheme': ['unity', 'charge']})


class TestReadTable:
    """Test input reading."""

    def test_smiles_file_skips_blank_lines(self, temp_dir):
        path = _write_smiles(temp_dir, ["CCO", "", "  CC(=O)O  "])
        table = read_table(path)
        assert list(table.columns) == ['smiles']
        assert table['smiles'].tolist() == ["CCO", "CC(=O)O"]

    def test_smiles_file_with_column_name(self, temp_dir):
        path = _write_smiles(temp_dir, ["CCO"])
        assert list(read_table(path, 'structure').columns) == ['structure']

    def test_csv_file(self, temp_dir, smiles_table):
        path = os.path.join(temp_dir, 'table.csv')
        smiles_table.to_csv(path, index=False)
        pd.testing.assert_frame_equal(read_table(path), smiles_table)


@pytest.mark.rdkit
class TestCalculateCommand:
    """Test the calculate command end to end."""

    def test_list_descriptors(self, capsys):
        assert main(['list-descriptors']) == 0
        out = capsys.readouterr().out
        assert "Available descriptors:" in out
        assert "  - hbond_acceptors" in out
        assert "  - whim" in out

    def test_hbond_acceptors_to_csv(self, temp_dir):
        source = _write_smiles(temp_dir, ["CCO", "CC(=O)O", "c1ccncc1"])
        output = os.path.join(temp_dir, 'out.csv')

        assert main(['calculate', 'hbond_acceptors', '-i', source, '-o', output]) == 0
        result = pd.read_csv(output)
        assert result['nHBAcc'].tolist() == [1, 2, 0]

    def test_csv_table_with_column(self, temp_dir, smiles_table):
        source = os.path.join(temp_dir, 'table.csv')
        smiles_table.to_csv(source, index=False)
        output = os.path.join(temp_dir, 'out.csv')

        assert main(['calculate', 'nHBAcc', '-i', source, '-c', 'smiles', '-o', output]) == 0
        result = pd.read_csv(output)
        assert list(result.columns) == ['name', 'smiles', 'nHBAcc']

    def test_preset_to_json(self, temp_dir):
        source = _write_smiles(temp_dir, ["CCO", "CCN"])
        output = os.path.join(temp_dir, 'out.json')

        code = main(['calculate', '--preset', 'whim_mass', '-i', source,
                     '-o', output, '--format', 'json'])
        assert code == 0
        with open(output) as f:
            records = json.load(f)
        assert len(records) == 2
        assert len(records[0]['WHIM Atomic Masses']) == 17
        assert 'WHIM Unity Weights' not in records[0]

    def test_config_file(self, temp_dir):
        source = _write_smiles(temp_dir, ["CCO"])
        config = os.path.join(temp_dir, 'config.yaml')
        with open(config, 'w') as f:
            f.write("descriptor_name: hbond_acceptors\nhandle_errors: skip\n")
        output = os.path.join(temp_dir, 'out.csv')

        assert main(['calculate', '--config', config, '-i', source, '-o', output]) == 0
        assert pd.read_csv(output)['nHBAcc'].tolist() == [1]

    def test_invalid_rows_written_as_missing(self, temp_dir):
        source = _write_smiles(temp_dir, ["CCO", "C1CC"])
        output = os.path.join(temp_dir, 'out.csv')

        assert main(['calculate', 'hbond_acceptors', '-i', source, '-o', output]) == 0
        result = pd.read_csv(output)
        assert result['nHBAcc'].iloc[0] == 1
        assert pd.isna(result['nHBAcc'].iloc[1])

    def test_raise_on_invalid_row(self, temp_dir, capsys):
        source = _write_smiles(temp_dir, ["C1CC"])
        code = main(['calculate', 'hbond_acceptors', '-i', source, '--errors', 'raise'])
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_empty_input(self, temp_dir, capsys):
        source = os.path.join(temp_dir, 'empty.smi')
        open(source, 'w').close()

        assert main(['calculate', 'hbond_acceptors', '-i', source]) == 1
        assert "No molecules found" in capsys.readouterr().err

    def test_missing_input_file(self, temp_dir):
        source = os.path.join(temp_dir, 'missing.smi')
        assert main(['calculate', 'hbond_acceptors', '-i', source]) == 1

    def test_unknown_descriptor(self, temp_dir, capsys):
        source = _write_smiles(temp_dir, ["CCO"])
        assert main(['calculate', 'maccs', '-i', source]) == 1
        assert "not found" in capsys.readouterr().err
