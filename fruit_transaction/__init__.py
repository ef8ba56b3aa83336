"""
Fruitchain - Transaction Module

This module implements the transaction encoding carried in a block's
transaction vector, in both its legacy and witness-extended forms.
"""

from .transaction import Transaction, TxIn, TxOut, OutPoint

__all__ = ['Transaction', 'TxIn', 'TxOut', 'OutPoint']
