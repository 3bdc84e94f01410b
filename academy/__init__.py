"""Course content, accounts and learning-behaviour analytics backend."""
