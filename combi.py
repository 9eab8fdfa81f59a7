# Twophase, copyright 2022 Zach Wegner
#
# This file is part of Twophase.
#
# Twophase is free software: you can redistribute it and/or modify it under the
# terms of the GNU Affero General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# Twophase is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU Affero General Public License for more
# details.
#
# You should have received a copy of the GNU Affero General Public License
# along with Twophase.  If not, see <https://www.gnu.org/licenses/>.

# Combinatorial helpers for turning piece permutations and orientations into
# dense integer indices and back. Everything here is a pure function over
# plain lists, so the coordinate code can use these without caring about
# corners vs. edges.

FACTORIAL = [1, 1]
for i in range(2, 13):
    FACTORIAL.append(FACTORIAL[i-1] * i)

def factorial(n):
    if n < len(FACTORIAL):
        return FACTORIAL[n]
    return n * factorial(n - 1)

# Number of ways to choose k things from n. Choosing more things than there
# are is zero ways, which the location offsets below depend on
def binomial(n, k):
    if k < 0 or k > n:
        return 0
    return factorial(n) // (factorial(k) * factorial(n - k))

# Rotate l[lo..hi] (inclusive) by one place, in place
def rotate_left(l, lo, hi):
    first = l[lo]
    l[lo:hi] = l[lo+1:hi+1]
    l[hi] = first

def rotate_right(l, lo, hi):
    last = l[hi]
    l[lo+1:hi+1] = l[lo:hi]
    l[lo] = last

# Rank the placement of a subset of pieces within a permutation. <pieces> is
# the sorted list of tracked piece ids, which take up k of the n positions. The
# index is k! * location + order, where:
#   * location is the rank of the set of occupied positions, using a binomial
#       coefficient for each tracked piece we pass while scanning. Scanning
#       from the right makes pieces sitting in the last k positions rank 0,
#       which is what we want for the slice edges.
#   * order is the relative order of the tracked pieces, as a factorial number
#       system digit string: for each length j, count how many rotations it
#       takes to bring the right piece to the end of the prefix.
# With all n pieces tracked, the location is always 0 and this is a plain
# permutation rank.
def rank_subset(perm, pieces, from_right=False):
    n = len(perm)
    k = len(pieces)
    tracked = set(pieces)
    sub = [None] * k
    location = 0
    x = 0
    if from_right:
        for j in range(n - 1, -1, -1):
            if perm[j] in tracked:
                location += binomial(n - 1 - j, x + 1)
                sub[k - 1 - x] = perm[j]
                x += 1
    else:
        for j in range(n):
            if perm[j] in tracked:
                location += binomial(j, x + 1)
                sub[x] = perm[j]
                x += 1
    assert x == k, (perm, pieces)

    order = 0
    for j in range(k - 1, 0, -1):
        s = 0
        while sub[j] != pieces[j]:
            rotate_left(sub, 0, j)
            s += 1
        order = (j + 1) * order + s
    return FACTORIAL[k] * location + order

# Inverse of rank_subset. Untracked positions get the remaining pieces in
# increasing order, or None if <fill> is false (used to merge two partial
# permutations).
def unrank_subset(index, pieces, n, from_right=False, fill=True):
    k = len(pieces)
    [location, order] = divmod(index, FACTORIAL[k])
    assert location < binomial(n, k), (index, pieces, n)

    sub = list(pieces)
    for i in range(1, k):
        [order, s] = divmod(order, i + 1)
        for _ in range(s):
            rotate_right(sub, 0, i)

    perm = [None] * n
    x = k - 1
    if from_right:
        for i in range(n):
            if x < 0:
                break
            b = binomial(n - 1 - i, x + 1)
            if location >= b:
                perm[i] = sub[k - 1 - x]
                location -= b
                x -= 1
    else:
        for i in range(n - 1, -1, -1):
            if x < 0:
                break
            b = binomial(i, x + 1)
            if location >= b:
                perm[i] = sub[x]
                location -= b
                x -= 1

    if fill:
        tracked = set(pieces)
        others = iter(p for p in range(n) if p not in tracked)
        perm = [next(others) if p is None else p for p in perm]
    return perm

# Orientation vector <-> index. The first n-1 entries are the digits in base
# r (most significant first), and the last entry is whatever makes the total
# 0 modulo r.
def rank_orient(orient, r):
    index = 0
    for o in orient[:-1]:
        index = index * r + o
    return index

def unrank_orient(index, n, r):
    orient = [0] * n
    total = 0
    for i in range(n - 2, -1, -1):
        [index, d] = divmod(index, r)
        orient[i] = d
        total += d
    orient[n - 1] = -total % r
    return orient

def parity(perm):
    inversions = 0
    for i in range(len(perm)):
        for j in range(i):
            if perm[j] > perm[i]:
                inversions += 1
    return inversions & 1
