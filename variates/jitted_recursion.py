import numpy as np
from numba import njit
from numba import int64, uint64, void

"""
dSFMT recursion over a (words, 2) uint64 state: row i is one 128-bit word seen as two 64-bit lanes,
row n is the carried "lung" word. Everything here mutates arrays in place and never allocates
besides the 2-element lung copy.
"""

_U32 = np.uint64(32)


# ─────────────────────────────────────────────────────────────────────────────
#  One step of the recurrence:  r[ri] <- f(a[ai], b[bi], lung),  lung updated in place
# ─────────────────────────────────────────────────────────────────────────────
@njit(void(uint64[:, ::1], int64, uint64[:, ::1], int64, uint64[:, ::1], int64, uint64[::1],
           uint64, uint64, uint64, uint64),
      nogil=True, inline='always', no_cpython_wrapper=True)
def do_recursion(r, ri, a, ai, b, bi, lung, sl1, sr, msk1, msk2):
    t0 = a[ai, 0]
    t1 = a[ai, 1]
    L0 = lung[0]
    L1 = lung[1]
    lung[0] = (t0 << sl1) ^ (L1 >> _U32) ^ (L1 << _U32) ^ b[bi, 0]
    lung[1] = (t1 << sl1) ^ (L0 >> _U32) ^ (L0 << _U32) ^ b[bi, 1]
    r[ri, 0] = (lung[0] >> sr) ^ (lung[0] & msk1) ^ t0
    r[ri, 1] = (lung[1] >> sr) ^ (lung[1] & msk2) ^ t1


# ─────────────────────────────────────────────────────────────────────────────
#  Batch regeneration: every one of the n words advances exactly once
# ─────────────────────────────────────────────────────────────────────────────
@njit(void(uint64[:, ::1], int64, int64, uint64, uint64, uint64, uint64), nogil=True)
def gen_rand_all(status, n, pos1, sl1, sr, msk1, msk2):
    """
    status : (n+1, 2) uint64, rows [0,n) buffered words, row n = lung.
    Words past n - pos1 read their companion from the part already regenerated.
    """
    lung = status[n].copy()

    i = 0
    while i < n - pos1:
        do_recursion(status, i, status, i, status, i + pos1, lung, sl1, sr, msk1, msk2)
        i += 1
    while i < n:
        do_recursion(status, i, status, i, status, i + pos1 - n, lung, sl1, sr, msk1, msk2)
        i += 1

    status[n, 0] = lung[0]
    status[n, 1] = lung[1]


# ─────────────────────────────────────────────────────────────────────────────
#  Bulk fill: the same stream written straight into a caller array of >= n words
# ─────────────────────────────────────────────────────────────────────────────
@njit(void(uint64[:, ::1], uint64[:, ::1], int64, int64, uint64, uint64, uint64, uint64), nogil=True)
def gen_rand_array(array, status, n, pos1, sl1, sr, msk1, msk2):
    """
    array  : (size, 2) uint64 with size >= n (checked by the caller)
    On return status[0:n] holds the last n produced words, so the stream
    continues from there with either gen_rand_all or another gen_rand_array.
    """
    size = array.shape[0]
    lung = status[n].copy()

    i = 0
    while i < n - pos1:
        do_recursion(array, i, status, i, status, i + pos1, lung, sl1, sr, msk1, msk2)
        i += 1
    while i < n:
        do_recursion(array, i, status, i, array, i + pos1 - n, lung, sl1, sr, msk1, msk2)
        i += 1
    while i < size - n:
        do_recursion(array, i, array, i - n, array, i + pos1 - n, lung, sl1, sr, msk1, msk2)
        i += 1

    # words already produced that belong to the new state
    j = 0
    while j < 2 * n - size:
        status[j, 0] = array[j + size - n, 0]
        status[j, 1] = array[j + size - n, 1]
        j += 1
    while i < size:
        do_recursion(array, i, array, i - n, array, i + pos1 - n, lung, sl1, sr, msk1, msk2)
        status[j, 0] = array[i, 0]
        status[j, 1] = array[i, 1]
        i += 1
        j += 1

    status[n, 0] = lung[0]
    status[n, 1] = lung[1]
