import logging

from groebner.basis import compute_groebner_basis, is_in_ideal, Ideal
from groebner.fields import QQ, GF
from groebner.options import EngineOptions
from groebner.polynomials import PolynomialRing

def cycle_n(n, field=QQ):
    R = PolynomialRing(field, n, "grevlex")
    x = R.gens()

    # cyclic products x_i * x_{i+1} * ... (indices wrap around)
    def prod_vars(start, length):
        m = R.one()
        for i in range(length):
            m = m * x[(start + i) % n]
        return m

    system = []
    for k in range(1, n):
        system.append(sum((prod_vars(i, k) for i in range(n)), R.zero()))
    system.append(prod_vars(0, n) - 1)
    return R, system

def surfaces():
    R = PolynomialRing(QQ, 2, "grevlex", names="x y")
    x, y = R.gens()
    f1 = 2*x**2 - 4*x + y**2 - 4*y + 3
    f2 = x**2 - 2*x + 3*y**2 - 12*y + 9
    return R, [f1, f2]

def show(title, polys):
    print(title)
    for g in polys:
        print(" ", g)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    R, F = surfaces()
    show("Problem:", F)
    G = compute_groebner_basis(R, F)
    show("Grobner basis:", G)
    G = compute_groebner_basis(R, F, EngineOptions(algorithm="f4"))
    show("Grobner basis (F4):", G)

    R, system = cycle_n(3)
    show("Problem:", system)
    G = compute_groebner_basis(R, system)
    show("Grobner basis:", G)
    G = compute_groebner_basis(R, system, EngineOptions(algorithm="f4"))
    show("Grobner basis (F4):", G)
    x1, x2, x3 = R.gens()
    print("x3**3 - 1 in ideal:", is_in_ideal(G, x3**3 - 1))
    print("x1 + 1 in ideal:   ", is_in_ideal(G, x1 + 1))

    R, system = cycle_n(4, GF(32003))
    show("Cyclic-4 over GF(32003):", compute_groebner_basis(R, system))

    R = PolynomialRing(QQ, 2, "grevlex", names="x y")
    x, y = R.gens()
    I = Ideal([x**2 + y**2 - 1, x - y])
    show("Circle meets diagonal:", I.groebner_basis())
    print("x**2 + y**2 - 1 in I:", x**2 + y**2 - 1 in I)
    print("x + y in I:          ", x + y in I)
    print("x + y reduces to:    ", I.reduce(x + y))
