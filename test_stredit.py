import contextlib
import editcost
import io
import os
import stredit
import tempfile
import unittest


class StreditTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, content):
        path = os.path.join(self.tmp.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def run_main(self, argv):
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            status = stredit.main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_read_pair(self):
        cases = (
            ('abc\ndef\n', ('abc', 'def')),
            ('abc\ndef', ('abc', 'def')),
            ('abc\n\n', ('abc', '')),
            ('\nxyz\n', ('', 'xyz')),
            ('abc\ndef\nignored\n', ('abc', 'def')),
        )
        for content, pair in cases:
            path = self.write('pair.txt', content)
            self.assertEqual(stredit.read_pair(path), pair)

    def test_read_pair_errors(self):
        with self.assertRaises(stredit.InputError):
            stredit.read_pair(os.path.join(self.tmp.name, 'missing.txt'))
        for content in ('', 'abc\n'):
            path = self.write('short.txt', content)
            with self.assertRaises(stredit.InputError):
                stredit.read_pair(path)

    def test_pp_script(self):
        script = (editcost.ORIGIN,
                editcost.Step(1, 0, editcost.Op.DEL),
                editcost.Step(1, 1, editcost.Op.INS))
        self.assertEqual(stredit.pp_script(script), '[[0,0], [1,0]-D, [1,1]-I]')

    def test_pp_matrix(self):
        matrix = editcost.matrix('a', 'b')
        lines = stredit.pp_matrix('a', 'b', matrix).splitlines()
        self.assertEqual([l.split() for l in lines], [
            ['b'],
            ['i/j', '[0]', '[1]'],
            ['[0]', '0.0', '0.5'],
            ['a', '[1]', '0.4', '0.9'],
        ])
        # Columns are aligned on their right edge.
        self.assertEqual(len({len(l) for l in lines}), 1)

    def test_pp_matrix_wide(self):
        source = 'abcdefghijkl'
        matrix = editcost.matrix(source, 'x')
        lines = stredit.pp_matrix(source, 'x', matrix).splitlines()
        self.assertEqual(len(lines), len(source) + 3)
        self.assertEqual(lines[-1].split(), ['l', '[12]', '4.8', '5.3'])
        self.assertEqual(len({len(l) for l in lines[1:]}), 1)

    def test_example(self):
        status, out, err = self.run_main([])
        self.assertEqual(status, 0)
        self.assertIn('From: aabab\nTo: babb\n', out)
        self.assertIn('Matrix:', out)
        self.assertIn('Final cost(n,m) = cost(5,4) = 1.3\n', out)
        self.assertIn('Decision Sequences:\n[[0,0], ', out)

    def test_files(self):
        path = self.write('ab.txt', 'a\nb\n')
        status, out, err = self.run_main(['--no-example', path])
        self.assertEqual(status, 0)
        self.assertNotIn('aabab', out)
        self.assertIn(f'{path}:\n', out)
        self.assertIn('Final cost(n,m) = cost(1,1) = 0.9\n', out)
        self.assertIn('[[0,0], [1,0]-D, [1,1]-I]\n[[0,0], [0,1]-I, [1,1]-D]\n', out)

    def test_display_length(self):
        path = self.write('long.txt', 'a' * 11 + '\n\n')
        status, out, err = self.run_main(['--no-example', path])
        self.assertEqual(status, 0)
        self.assertNotIn('Matrix:', out)
        self.assertNotIn('Decision Sequences:', out)
        self.assertIn('Final cost(n,m) = cost(11,0) = 4.4\n', out)
        status, out, err = self.run_main(
                ['--no-example', '--max-display-length', '11', path])
        self.assertIn('Matrix:', out)
        self.assertIn('Decision Sequences:', out)

    def test_costs(self):
        path = self.write('ab.txt', 'ab\nba\n')
        status, out, err = self.run_main(['--no-example', '--insert-cost', '1',
                '--delete-cost', '1', '--change-cost', '1', path])
        self.assertEqual(status, 0)
        self.assertIn('cost(2,2) = 2.0\n', out)
        self.assertIn('[[0,0], [1,1]-C, [2,2]-C]', out)

    def test_failures(self):
        good = self.write('good.txt', 'abc\nabd\n')
        bad = self.write('bad.txt', 'abc\n')
        missing = os.path.join(self.tmp.name, 'missing.txt')
        with self.assertLogs(level='ERROR') as logs:
            status, out, err = self.run_main(
                    ['--no-example', missing, bad, good])
        self.assertEqual(status, 1)
        self.assertEqual(len(logs.output), 2)
        self.assertIn('missing.txt', logs.output[0])
        self.assertIn('expected 2 lines', logs.output[1])
        self.assertIn('Final cost(n,m) = cost(3,3) = 0.9\n', out)

    def test_invalid_costs(self):
        cases = (
            ['--insert-cost', '-1'],
            ['--change-cost', '0.25'],
            ['--insert-cost', 'inf'],
            ['--delete-cost', 'nan'],
        )
        for argv in cases:
            with self.assertRaises(SystemExit) as cm:
                self.run_main(argv)
            self.assertEqual(cm.exception.code, 2)
